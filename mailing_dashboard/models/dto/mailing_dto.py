"""
Data Transfer Objects for the mailing upload queue and comparison export.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from mailing_dashboard.models.queue_item import QueueItem, badge_for


class StatusBadgeResponse(BaseModel):
    label: str
    tone: str
    icon: str


class UploadStatsResponse(BaseModel):
    novos: int = 0
    duplicados: int = 0


class QueueItemResponse(BaseModel):
    """Response schema for one upload queue item."""
    id: str
    filename: str
    size: int
    mailing_name: str
    status: str
    badge: StatusBadgeResponse
    progress: int
    total_rows: Optional[int] = None
    processed_rows: int = 0
    stats: UploadStatsResponse
    error_message: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_item(cls, item: QueueItem) -> "QueueItemResponse":
        badge = badge_for(item.status)
        return cls(
            id=item.id,
            filename=item.filename,
            size=item.size,
            mailing_name=item.mailing_name,
            status=item.status.value,
            badge=StatusBadgeResponse(label=badge.label, tone=badge.tone, icon=badge.icon),
            progress=item.progress,
            total_rows=item.total_rows,
            processed_rows=item.processed_rows,
            stats=UploadStatsResponse(novos=item.stats.novos, duplicados=item.stats.duplicados),
            error_message=item.error_message,
            created_at=item.created_at
        )


class QueueSummaryResponse(BaseModel):
    total: int
    pending: int
    completed: int
    errors: int
    processing: bool


class QueueResponse(BaseModel):
    """Response schema for the whole upload queue."""
    items: list[QueueItemResponse]
    summary: QueueSummaryResponse


class RenameMailingRequest(BaseModel):
    """Request schema for editing a pending item's mailing name."""
    mailing_name: str = Field(..., min_length=1, max_length=255)

    @field_validator('mailing_name')
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or v.strip() == "":
            raise ValueError("Field cannot be empty")
        return v.strip()


class QueueRunResponse(BaseModel):
    """Response schema for a started queue run."""
    message: str
    item_ids: list[str]


class ComparisonExportRequest(BaseModel):
    """Request schema for exporting compatible records of selected mailings."""
    mailings: list[str] = Field(default_factory=list, description="Selected mailing names")
