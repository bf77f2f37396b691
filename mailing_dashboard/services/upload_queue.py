"""
Upload queue holding the files waiting for, or done with, ingestion.
"""
from typing import Dict, List, Optional
from mailing_dashboard.core.exceptions import (
    QueueItemNotFoundException,
    QueueLockedException,
    ValidationException
)
from mailing_dashboard.core.logging_config import get_logger
from mailing_dashboard.models.queue_item import QueueItem, QueueItemStatus

logger = get_logger("services.upload_queue")


class UploadQueue:
    """Ordered collection of queue items plus the global processing flag."""

    def __init__(self):
        self._items: List[QueueItem] = []
        self.processing = False

    @property
    def items(self) -> List[QueueItem]:
        return list(self._items)

    def add_file(self, filename: str, content: bytes, mailing_name: Optional[str] = None) -> QueueItem:
        """Append a new PENDING item for an uploaded file."""
        item = QueueItem(filename=filename, content=content, mailing_name=mailing_name)
        self._items.append(item)
        logger.info(f"Queued {filename} as mailing '{item.mailing_name}' ({item.size} bytes)")
        return item

    def get(self, item_id: str) -> QueueItem:
        for item in self._items:
            if item.id == item_id:
                return item
        raise QueueItemNotFoundException(f"Queue item '{item_id}' not found")

    def rename(self, item_id: str, mailing_name: str) -> QueueItem:
        """
        Edit the mailing name of a pending item.

        Items that already left PENDING keep their name unchanged.

        Raises:
            QueueLockedException: If a run is active
            ValidationException: If the name is blank
        """
        if self.processing:
            raise QueueLockedException("Cannot rename mailings while the queue is processing")
        mailing_name = (mailing_name or "").strip()
        if not mailing_name:
            raise ValidationException("Mailing name cannot be empty")

        item = self.get(item_id)
        if not item.rename(mailing_name):
            logger.debug(f"Ignored rename of {item.id}: status is {item.status}")
        return item

    def remove(self, item_id: str) -> None:
        """
        Delete a pending item.

        Raises:
            QueueLockedException: If a run is active or the item is not pending
        """
        if self.processing:
            raise QueueLockedException("Cannot remove items while the queue is processing")
        item = self.get(item_id)
        if item.status is not QueueItemStatus.PENDING:
            raise QueueLockedException(f"Only pending items can be removed, item is {item.status}")
        self._items.remove(item)
        logger.info(f"Removed {item.filename} from the queue")

    def clear_finished(self) -> int:
        """Drop completed and failed items. Returns how many were removed."""
        if self.processing:
            raise QueueLockedException("Cannot clear the queue while it is processing")
        kept = [item for item in self._items if not item.status.is_terminal]
        removed = len(self._items) - len(kept)
        self._items = kept
        return removed

    def pending(self) -> List[QueueItem]:
        return [item for item in self._items if item.status is QueueItemStatus.PENDING]

    def active(self) -> List[QueueItem]:
        return [item for item in self._items if item.status.is_active]

    def summary(self) -> Dict[str, object]:
        return {
            "total": len(self._items),
            "pending": sum(1 for i in self._items if i.status is QueueItemStatus.PENDING),
            "completed": sum(1 for i in self._items if i.status is QueueItemStatus.COMPLETED),
            "errors": sum(1 for i in self._items if i.status is QueueItemStatus.ERROR),
            "processing": self.processing,
        }

    def __len__(self) -> int:
        return len(self._items)
