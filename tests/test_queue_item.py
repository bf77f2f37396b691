"""
Unit tests for the QueueItem domain model.
"""
import pytest
from mailing_dashboard.core.exceptions import InvalidStateTransitionException
from mailing_dashboard.models.queue_item import (
    STATUS_BADGES,
    QueueItem,
    QueueItemStatus,
    badge_for,
    default_mailing_name
)


class TestQueueItem:
    """Test suite for QueueItem lifecycle and invariants."""

    @pytest.fixture
    def item(self):
        return QueueItem(filename="clientes_sp.xlsx", content=b"abc")

    def test_new_item_defaults(self, item):
        """Test a new item is pending with a name derived from the file."""
        assert item.status is QueueItemStatus.PENDING
        assert item.mailing_name == "clientes_sp"
        assert item.size == 3
        assert item.progress == 0
        assert item.total_rows is None
        assert item.processed_rows == 0
        assert item.stats.novos == 0
        assert item.error_message is None

    def test_ids_are_unique(self):
        """Test each item gets its own id."""
        ids = {QueueItem(filename="a.csv", content=b"").id for _ in range(50)}
        assert len(ids) == 50

    def test_default_mailing_name_strips_last_extension_only(self):
        assert default_mailing_name("base.maio.csv") == "base.maio"
        assert default_mailing_name("semextensao") == "semextensao"

    def test_rename_while_pending(self, item):
        assert item.rename("novo_nome") is True
        assert item.mailing_name == "novo_nome"

    def test_rename_after_pending_is_noop(self, item):
        """Test renaming is ignored once the item left PENDING."""
        item.transition_to(QueueItemStatus.READING)

        assert item.rename("outro") is False
        assert item.mailing_name == "clientes_sp"

    def test_happy_path_transitions(self, item):
        item.transition_to(QueueItemStatus.READING)
        item.transition_to(QueueItemStatus.UPLOADING)
        item.transition_to(QueueItemStatus.COMPLETED)
        assert item.status.is_terminal

    @pytest.mark.parametrize("status", [QueueItemStatus.PENDING, QueueItemStatus.READING, QueueItemStatus.UPLOADING])
    def test_error_reachable_from_non_terminal_states(self, status):
        item = QueueItem(filename="a.csv", content=b"")
        path = [QueueItemStatus.READING, QueueItemStatus.UPLOADING]
        for step in path[:path.index(status) + 1] if status in path else []:
            item.transition_to(step)

        item.mark_error("falhou")

        assert item.status is QueueItemStatus.ERROR
        assert item.error_message == "falhou"

    @pytest.mark.parametrize("terminal", [QueueItemStatus.COMPLETED, QueueItemStatus.ERROR])
    def test_terminal_states_are_final(self, item, terminal):
        """Test no transition leaves COMPLETED or ERROR."""
        item.transition_to(QueueItemStatus.READING)
        item.transition_to(QueueItemStatus.UPLOADING)
        item.transition_to(terminal)

        for status in QueueItemStatus:
            with pytest.raises(InvalidStateTransitionException):
                item.transition_to(status)

    def test_cannot_skip_reading(self, item):
        with pytest.raises(InvalidStateTransitionException):
            item.transition_to(QueueItemStatus.UPLOADING)

    def test_progress_never_decreases(self, item):
        item.advance_progress(48)
        item.advance_progress(10)
        assert item.progress == 48

    def test_progress_clamped_to_100(self, item):
        item.advance_progress(140)
        assert item.progress == 100

    def test_total_rows_set_once(self, item):
        item.set_total_rows(10)
        with pytest.raises(InvalidStateTransitionException):
            item.set_total_rows(12)

    def test_processed_rows_cannot_exceed_total(self, item):
        item.set_total_rows(10)
        item.record_processed(5)
        with pytest.raises(InvalidStateTransitionException):
            item.record_processed(11)
        assert item.processed_rows == 5

    def test_processed_rows_only_increase(self, item):
        item.set_total_rows(10)
        item.record_processed(8)
        item.record_processed(3)
        assert item.processed_rows == 8


class TestStatusBadges:
    """Test suite for status presentation."""

    def test_every_status_has_a_badge(self):
        assert set(STATUS_BADGES) == set(QueueItemStatus)

    def test_badge_for_error(self):
        badge = badge_for(QueueItemStatus.ERROR)
        assert badge.tone == "red"
        assert badge.label == "Erro"

    def test_active_states(self):
        assert {s for s in QueueItemStatus if s.is_active} == {QueueItemStatus.READING, QueueItemStatus.UPLOADING}
