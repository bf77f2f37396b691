"""
Sequential Queue Processor.
Runs pending queue items through parse and upload one at a time, in the
order they were added.
"""
import asyncio
from typing import List, Optional
from mailing_dashboard.core.exceptions import MailingDashboardException, QueueLockedException
from mailing_dashboard.core.logging_config import get_logger
from mailing_dashboard.models.queue_item import QueueItem, QueueItemStatus, UploadStats
from mailing_dashboard.services.batch_uploader import BatchUploader
from mailing_dashboard.services.row_source import RowSourceAdapter
from mailing_dashboard.services.upload_queue import UploadQueue

logger = get_logger("services.queue_processor")

READING_PROGRESS = 5
UNKNOWN_ERROR_MESSAGE = "Erro desconhecido"


class SequentialQueueProcessor:
    """Orchestrates one-at-a-time processing of the upload queue."""

    def __init__(
        self,
        queue: UploadQueue,
        row_source: RowSourceAdapter,
        uploader: BatchUploader
    ):
        self.queue = queue
        self.row_source = row_source
        self.uploader = uploader
        self._upload_lock = asyncio.Lock()

    def begin_run(self) -> List[QueueItem]:
        """
        Snapshot the pending items and raise the processing flag.

        Returns:
            Items to process, in insertion order. Empty if nothing is pending,
            in which case the flag stays down.

        Raises:
            QueueLockedException: If a run is already active
        """
        if self.queue.processing:
            raise QueueLockedException("The upload queue is already processing")

        snapshot = self.queue.pending()
        if snapshot:
            self.queue.processing = True
            logger.info(f"Starting queue run with {len(snapshot)} item(s)")
        return snapshot

    async def process(self, snapshot: List[QueueItem]) -> None:
        """Process a snapshot sequentially. Clears the processing flag when done."""
        try:
            for item in snapshot:
                await self.process_item(item)
        finally:
            self.queue.processing = False
            logger.info("Queue run finished")

    async def run(self) -> List[QueueItem]:
        """Start a run and wait for every snapshotted item to finish."""
        snapshot = self.begin_run()
        if snapshot:
            await self.process(snapshot)
        return snapshot

    async def process_item(self, item: QueueItem) -> None:
        """
        Parse and upload one item, leaving it COMPLETED or ERROR.

        Failures are recorded on the item and never raised.
        """
        if item.status is not QueueItemStatus.PENDING:
            logger.debug(f"Skipping {item.id}: status is {item.status}")
            return

        async with self._upload_lock:
            try:
                item.transition_to(QueueItemStatus.READING)
                item.advance_progress(READING_PROGRESS)

                rows = await self.row_source.parse(item.filename, item.content)

                item.transition_to(QueueItemStatus.UPLOADING)
                item.set_total_rows(len(rows))
                item.advance_progress(self.uploader.parse_budget)

                def on_progress(processed: int, progress: int, stats: UploadStats) -> None:
                    item.record_processed(processed)
                    item.advance_progress(progress)
                    item.stats = UploadStats(novos=stats.novos, duplicados=stats.duplicados)

                stats = await self.uploader.upload(rows, item.mailing_name, on_progress=on_progress)

                item.stats = stats
                item.advance_progress(100)
                item.transition_to(QueueItemStatus.COMPLETED)
                logger.info(
                    f"Mailing '{item.mailing_name}' completed: {item.total_rows} rows, "
                    f"{stats.novos} new, {stats.duplicados} duplicated"
                )

            except MailingDashboardException as e:
                logger.error(f"Mailing '{item.mailing_name}' failed: {e.message}")
                self._fail(item, e.message)
            except Exception as e:
                logger.exception(f"Unexpected error processing {item.filename}")
                self._fail(item, str(e))

    def _fail(self, item: QueueItem, message: Optional[str]) -> None:
        if not item.status.is_terminal:
            item.mark_error(message or UNKNOWN_ERROR_MESSAGE)
