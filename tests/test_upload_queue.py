"""
Unit tests for UploadQueue.
Tests queue mutations and the guards that apply while processing.
"""
import pytest
from mailing_dashboard.core.exceptions import (
    QueueItemNotFoundException,
    QueueLockedException,
    ValidationException
)
from mailing_dashboard.models.queue_item import QueueItemStatus
from mailing_dashboard.services.upload_queue import UploadQueue


class TestUploadQueue:
    """Test suite for UploadQueue."""

    @pytest.fixture
    def queue(self):
        queue = UploadQueue()
        queue.add_file("a.csv", b"nome\nAna\n")
        queue.add_file("b.xlsx", b"xx")
        return queue

    def test_add_file_keeps_insertion_order(self, queue):
        assert [item.filename for item in queue.items] == ["a.csv", "b.xlsx"]
        assert all(item.status is QueueItemStatus.PENDING for item in queue.items)

    def test_add_file_with_explicit_name(self):
        queue = UploadQueue()
        item = queue.add_file("a.csv", b"", mailing_name="campanha_maio")
        assert item.mailing_name == "campanha_maio"

    def test_get_unknown_item(self, queue):
        with pytest.raises(QueueItemNotFoundException):
            queue.get("missing")

    def test_rename_pending(self, queue):
        item = queue.items[0]
        queue.rename(item.id, "  base_nova  ")
        assert item.mailing_name == "base_nova"

    def test_rename_non_pending_is_noop(self, queue):
        item = queue.items[0]
        item.transition_to(QueueItemStatus.READING)

        result = queue.rename(item.id, "outro")

        assert result.mailing_name == "a"

    def test_rename_blank_rejected(self, queue):
        with pytest.raises(ValidationException):
            queue.rename(queue.items[0].id, "   ")

    def test_rename_blocked_while_processing(self, queue):
        queue.processing = True
        with pytest.raises(QueueLockedException):
            queue.rename(queue.items[0].id, "x")
        assert queue.items[0].mailing_name == "a"

    def test_remove_pending(self, queue):
        item = queue.items[0]
        queue.remove(item.id)
        assert [i.filename for i in queue.items] == ["b.xlsx"]

    def test_remove_blocked_while_processing(self, queue):
        queue.processing = True
        with pytest.raises(QueueLockedException):
            queue.remove(queue.items[0].id)
        assert len(queue) == 2

    def test_remove_non_pending_rejected(self, queue):
        item = queue.items[0]
        item.mark_error("boom")
        with pytest.raises(QueueLockedException):
            queue.remove(item.id)

    def test_add_allowed_while_processing(self, queue):
        queue.processing = True
        queue.add_file("c.csv", b"")
        assert len(queue) == 3

    def test_clear_finished(self, queue):
        queue.items[0].mark_error("boom")
        assert queue.clear_finished() == 1
        assert [i.filename for i in queue.items] == ["b.xlsx"]

    def test_summary(self, queue):
        queue.items[0].mark_error("boom")
        assert queue.summary() == {
            "total": 2,
            "pending": 1,
            "completed": 0,
            "errors": 1,
            "processing": False,
        }
