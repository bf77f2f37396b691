"""
Unit tests for SequentialQueueProcessor.
Tests one-at-a-time processing, snapshots and per-item failure isolation.
"""
import asyncio
import pytest
from mailing_dashboard.core.exceptions import DataSourceException, QueueLockedException
from mailing_dashboard.models.queue_item import QueueItemStatus
from mailing_dashboard.services.batch_uploader import BatchUploader
from mailing_dashboard.services.queue_processor import SequentialQueueProcessor
from mailing_dashboard.services.row_source import RowSourceAdapter
from mailing_dashboard.services.upload_queue import UploadQueue
from tests.helpers import make_csv


class TestSequentialQueueProcessor:
    """Test suite for SequentialQueueProcessor."""

    @pytest.fixture
    def queue(self):
        return UploadQueue()

    @pytest.fixture
    def processor(self, queue, fake_data_source):
        uploader = BatchUploader(fake_data_source, chunk_size=500, parse_budget=10)
        return SequentialQueueProcessor(queue=queue, row_source=RowSourceAdapter(), uploader=uploader)

    def test_run_completes_every_pending_item(self, queue, processor, fake_data_source):
        first = queue.add_file("base_a.csv", make_csv(1200))
        second = queue.add_file("base_b.csv", make_csv(10))

        snapshot = asyncio.run(processor.run())

        assert snapshot == [first, second]
        for item in (first, second):
            assert item.status is QueueItemStatus.COMPLETED
            assert item.progress == 100
            assert item.processed_rows == item.total_rows
        assert first.total_rows == 1200
        assert first.stats.novos == 1197
        assert first.stats.duplicados == 3
        assert [len(c) for c in fake_data_source.upload_calls] == [500, 500, 200, 10]
        assert queue.processing is False

    def test_items_processed_in_insertion_order_one_at_a_time(self, queue, processor, fake_data_source):
        """Test at most one item is READING or UPLOADING whenever a chunk is sent."""
        for name in ("a.csv", "b.csv", "c.csv"):
            queue.add_file(name, make_csv(600))
        active_counts = []
        names_sent = []

        def hook(rows):
            active_counts.append(len(queue.active()))
            names_sent.append(rows[0]["malling_name"])

        fake_data_source.upload_hook = hook

        asyncio.run(processor.run())

        assert active_counts and max(active_counts) == 1
        assert names_sent == ["a", "a", "b", "b", "c", "c"]

    def test_failure_does_not_abort_run(self, queue, processor, fake_data_source):
        """Test a failed item goes to ERROR and the next item still runs."""
        fake_data_source.upload_failures[1] = DataSourceException("Servidor indisponível", status_code=503)
        failed = queue.add_file("a.csv", make_csv(5))
        ok = queue.add_file("b.csv", make_csv(5))

        asyncio.run(processor.run())

        assert failed.status is QueueItemStatus.ERROR
        assert failed.error_message == "Servidor indisponível"
        assert failed.progress == 10
        assert ok.status is QueueItemStatus.COMPLETED
        assert queue.summary()["errors"] == 1
        assert queue.summary()["completed"] == 1

    def test_parse_failure_marks_item_error(self, queue, processor, fake_data_source):
        broken = queue.add_file("broken.xlsx", b"not a workbook")
        ok = queue.add_file("ok.csv", make_csv(2))

        asyncio.run(processor.run())

        assert broken.status is QueueItemStatus.ERROR
        assert "Failed to read spreadsheet" in broken.error_message
        assert broken.total_rows is None
        assert ok.status is QueueItemStatus.COMPLETED
        assert len(fake_data_source.upload_calls) == 1

    def test_unexpected_exception_marks_item_error(self, queue, processor, fake_data_source):
        def hook(rows):
            raise RuntimeError("kaboom")

        fake_data_source.upload_hook = hook
        item = queue.add_file("a.csv", make_csv(2))

        asyncio.run(processor.run())

        assert item.status is QueueItemStatus.ERROR
        assert item.error_message == "kaboom"
        assert queue.processing is False

    def test_renamed_name_is_used(self, queue, processor, fake_data_source):
        item = queue.add_file("a.csv", make_csv(2))
        queue.rename(item.id, "campanha_final")

        asyncio.run(processor.run())

        assert {row["malling_name"] for row in fake_data_source.upload_calls[0]} == {"campanha_final"}

    def test_empty_file_completes(self, queue, processor, fake_data_source):
        item = queue.add_file("vazio.csv", b"nome,telefone1\n")

        asyncio.run(processor.run())

        assert item.status is QueueItemStatus.COMPLETED
        assert item.total_rows == 0
        assert item.progress == 100
        assert fake_data_source.upload_calls == []

    def test_only_pending_items_are_snapshotted(self, queue, processor):
        done = queue.add_file("a.csv", make_csv(1))
        done.mark_error("old failure")
        pending = queue.add_file("b.csv", make_csv(1))

        snapshot = processor.begin_run()

        assert snapshot == [pending]
        assert queue.processing is True

    def test_items_added_during_run_are_not_processed(self, queue, processor, fake_data_source):
        queue.add_file("a.csv", make_csv(3))
        late = []

        def hook(rows):
            if not late:
                late.append(queue.add_file("late.csv", make_csv(3)))

        fake_data_source.upload_hook = hook

        asyncio.run(processor.run())

        assert late[0].status is QueueItemStatus.PENDING
        assert queue.processing is False

    def test_begin_run_while_processing_rejected(self, queue, processor):
        queue.add_file("a.csv", make_csv(1))
        processor.begin_run()

        with pytest.raises(QueueLockedException):
            processor.begin_run()

    def test_empty_queue_leaves_flag_down(self, queue, processor):
        assert asyncio.run(processor.run()) == []
        assert queue.processing is False

    def test_progress_updates_are_monotonic(self, queue, processor, fake_data_source):
        item = queue.add_file("a.csv", make_csv(1200))
        observed = []
        fake_data_source.upload_hook = lambda rows: observed.append(item.progress)

        asyncio.run(processor.run())

        observed.append(item.progress)
        assert observed == [10, 48, 85, 100]
