"""
Upload queue item domain model.
Represents one uploaded file's journey through the upload pipeline.
"""
import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, FrozenSet, Optional
from mailing_dashboard.core.exceptions import InvalidStateTransitionException
from mailing_dashboard.core.logging_config import get_logger

logger = get_logger("models.queue_item")


class QueueItemStatus(str, Enum):
    """Lifecycle state of a queue item."""

    PENDING = "PENDING"
    READING = "READING"
    UPLOADING = "UPLOADING"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"

    def __str__(self) -> str:
        return self.value

    @property
    def is_terminal(self) -> bool:
        return self in (QueueItemStatus.COMPLETED, QueueItemStatus.ERROR)

    @property
    def is_active(self) -> bool:
        return self in (QueueItemStatus.READING, QueueItemStatus.UPLOADING)


ALLOWED_TRANSITIONS: Dict[QueueItemStatus, FrozenSet[QueueItemStatus]] = {
    QueueItemStatus.PENDING: frozenset({QueueItemStatus.READING, QueueItemStatus.ERROR}),
    QueueItemStatus.READING: frozenset({QueueItemStatus.UPLOADING, QueueItemStatus.ERROR}),
    QueueItemStatus.UPLOADING: frozenset({QueueItemStatus.COMPLETED, QueueItemStatus.ERROR}),
    QueueItemStatus.COMPLETED: frozenset(),
    QueueItemStatus.ERROR: frozenset(),
}


@dataclass(frozen=True)
class StatusBadge:
    """Presentation of a status in the dashboard."""
    label: str
    tone: str
    icon: str


STATUS_BADGES: Dict[QueueItemStatus, StatusBadge] = {
    QueueItemStatus.PENDING: StatusBadge(label="Aguardando", tone="slate", icon="clock"),
    QueueItemStatus.READING: StatusBadge(label="Lendo arquivo...", tone="blue", icon="loader"),
    QueueItemStatus.UPLOADING: StatusBadge(label="Enviando...", tone="blue", icon="loader"),
    QueueItemStatus.COMPLETED: StatusBadge(label="Concluído", tone="green", icon="check-circle"),
    QueueItemStatus.ERROR: StatusBadge(label="Erro", tone="red", icon="alert-circle"),
}

_missing_badges = set(QueueItemStatus) - set(STATUS_BADGES)
if _missing_badges:
    raise RuntimeError(f"No status badge for: {', '.join(sorted(s.value for s in _missing_badges))}")


def badge_for(status: QueueItemStatus) -> StatusBadge:
    """Return the badge for a status."""
    return STATUS_BADGES[status]


def default_mailing_name(filename: str) -> str:
    """Derive a mailing name from a filename by dropping its last extension."""
    return re.sub(r"\.[^/.]+$", "", filename)


@dataclass
class UploadStats:
    """Accumulated ingestion counters for one queue item."""
    novos: int = 0
    duplicados: int = 0


class QueueItem:
    """Domain model for one file in the upload queue."""

    def __init__(
        self,
        filename: str,
        content: bytes,
        mailing_name: Optional[str] = None,
        item_id: Optional[str] = None,
        created_at: Optional[datetime] = None
    ):
        self.id = item_id or uuid.uuid4().hex
        self.filename = filename
        self.content = content
        self.size = len(content)
        self.mailing_name = mailing_name if mailing_name is not None else default_mailing_name(filename)
        self.status = QueueItemStatus.PENDING
        self.progress = 0
        self.total_rows: Optional[int] = None
        self.processed_rows = 0
        self.stats = UploadStats()
        self.error_message: Optional[str] = None
        self.created_at = created_at or datetime.now(timezone.utc)

    def rename(self, mailing_name: str) -> bool:
        """
        Change the mailing name while the item is still pending.

        Returns:
            True if the name changed, False if the item is no longer editable
        """
        if self.status is not QueueItemStatus.PENDING:
            return False
        self.mailing_name = mailing_name
        return True

    def transition_to(self, status: QueueItemStatus) -> None:
        """
        Move the item to a new lifecycle state.

        Raises:
            InvalidStateTransitionException: If the lifecycle forbids the move
        """
        if status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidStateTransitionException(
                f"Queue item {self.id} cannot move from {self.status} to {status}"
            )
        logger.debug(f"Queue item {self.id} ({self.filename}): {self.status.value} -> {status.value}")
        self.status = status

    def advance_progress(self, progress: int) -> None:
        """Raise progress, clamped to 100. Lower values are ignored."""
        self.progress = max(self.progress, min(int(progress), 100))

    def set_total_rows(self, total_rows: int) -> None:
        if self.total_rows is not None:
            raise InvalidStateTransitionException(f"Queue item {self.id} already has a row count")
        self.total_rows = total_rows

    def record_processed(self, processed_rows: int) -> None:
        if processed_rows < self.processed_rows:
            return
        if self.total_rows is not None and processed_rows > self.total_rows:
            raise InvalidStateTransitionException(
                f"Queue item {self.id} processed {processed_rows} of {self.total_rows} rows"
            )
        self.processed_rows = processed_rows

    def mark_error(self, message: str) -> None:
        self.transition_to(QueueItemStatus.ERROR)
        self.error_message = message

    def __repr__(self):
        return f"QueueItem(id={self.id}, filename={self.filename}, status={self.status}, progress={self.progress})"
