"""
Mailing upload queue routes.
Handles adding spreadsheets to the queue, editing and removing pending items,
and starting a sequential processing run.
"""
from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, File, HTTPException, UploadFile, status
from mailing_dashboard.core import config
from mailing_dashboard.core.dependencies import get_queue_processor, get_row_source_adapter, get_upload_queue
from mailing_dashboard.models.dto.mailing_dto import (
    QueueItemResponse,
    QueueResponse,
    QueueRunResponse,
    QueueSummaryResponse,
    RenameMailingRequest
)
from mailing_dashboard.services.queue_processor import SequentialQueueProcessor
from mailing_dashboard.services.row_source import RowSourceAdapter
from mailing_dashboard.services.upload_queue import UploadQueue

router = APIRouter(prefix="/v1/api/uploads", tags=["Uploads"])


def _queue_response(queue: UploadQueue) -> QueueResponse:
    return QueueResponse(
        items=[QueueItemResponse.from_item(item) for item in queue.items],
        summary=QueueSummaryResponse(**queue.summary())
    )


@router.post("/queue", response_model=List[QueueItemResponse], status_code=status.HTTP_201_CREATED)
async def add_files(
    files: List[UploadFile] = File(..., description="Spreadsheets (.xlsx, .xlsm, .csv) with mailing rows"),
    queue: UploadQueue = Depends(get_upload_queue),
    row_source: RowSourceAdapter = Depends(get_row_source_adapter)
):
    """
    Add one or more files to the upload queue as pending items.

    Files are only parsed once a run reaches them.
    """
    max_size_bytes = config.settings.max_file_size_mb * 1024 * 1024
    accepted = []

    for file in files:
        if not file.filename or not row_source.is_supported(file.filename):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Only {', '.join(row_source.supported_extensions())} files are allowed"
            )

        content = await file.read()
        if len(content) > max_size_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File size ({len(content) / (1024 * 1024):.2f}MB) exceeds maximum allowed size of {config.settings.max_file_size_mb}MB"
            )
        accepted.append((file.filename, content))

    items = [queue.add_file(filename, content) for filename, content in accepted]
    return [QueueItemResponse.from_item(item) for item in items]


@router.get("/queue", response_model=QueueResponse)
async def get_queue(queue: UploadQueue = Depends(get_upload_queue)):
    """
    Get every queue item with its progress and the queue summary.
    """
    return _queue_response(queue)


@router.patch("/queue/{item_id}", response_model=QueueItemResponse)
async def rename_mailing(
    item_id: str,
    request: RenameMailingRequest,
    queue: UploadQueue = Depends(get_upload_queue)
):
    """
    Edit the mailing name of a pending item. Items past PENDING keep their name.
    """
    item = queue.rename(item_id, request.mailing_name)
    return QueueItemResponse.from_item(item)


@router.delete("/queue/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_item(item_id: str, queue: UploadQueue = Depends(get_upload_queue)):
    """
    Remove a pending item. Blocked while the queue is processing.
    """
    queue.remove(item_id)


@router.delete("/queue", response_model=QueueResponse)
async def clear_finished(queue: UploadQueue = Depends(get_upload_queue)):
    """
    Drop completed and failed items from the queue.
    """
    queue.clear_finished()
    return _queue_response(queue)


@router.post("/queue/run", response_model=QueueRunResponse, status_code=status.HTTP_202_ACCEPTED)
async def start_run(
    background_tasks: BackgroundTasks,
    processor: SequentialQueueProcessor = Depends(get_queue_processor)
):
    """
    Start processing every pending item, one file at a time.

    Poll GET /queue for progress.
    """
    snapshot = processor.begin_run()
    if not snapshot:
        return QueueRunResponse(message="No pending items to process", item_ids=[])

    background_tasks.add_task(processor.process, snapshot)
    return QueueRunResponse(
        message=f"Processing {len(snapshot)} item(s)",
        item_ids=[item.id for item in snapshot]
    )
