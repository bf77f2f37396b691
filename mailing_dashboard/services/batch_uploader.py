"""
Batch Uploader for mailing rows.
Splits parsed rows into fixed-size chunks and sends them to the ingestion
endpoint one after another.
"""
import inspect
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Optional, Union
from mailing_dashboard.core import config
from mailing_dashboard.core.exceptions import DataSourceException, UploadError
from mailing_dashboard.core.logging_config import get_logger
from mailing_dashboard.models.queue_item import UploadStats
from mailing_dashboard.repositories.data_source import DataSource

logger = get_logger("services.batch_uploader")

MAILING_NAME_FIELD = "malling_name"

ProgressCallback = Callable[[int, int, UploadStats], Union[None, Awaitable[None]]]


def chunk_rows(rows: List[Dict[str, Any]], size: int) -> Iterator[List[Dict[str, Any]]]:
    """Yield contiguous slices of at most `size` rows."""
    if size < 1:
        raise ValueError(f"Chunk size must be at least 1, got: {size}")
    for start in range(0, len(rows), size):
        yield rows[start:start + size]


def compute_progress(processed_rows: int, total_rows: int, parse_budget: int = 10) -> int:
    """Map processed rows onto the part of the progress bar left after parsing."""
    if total_rows <= 0:
        return 100
    return parse_budget + round(processed_rows / total_rows * (100 - parse_budget))


class BatchUploader:
    """Service for chunked, strictly sequential mailing ingestion."""

    def __init__(
        self,
        data_source: DataSource,
        chunk_size: Optional[int] = None,
        parse_budget: Optional[int] = None
    ):
        self.data_source = data_source
        self.chunk_size = chunk_size if chunk_size is not None else config.settings.upload_batch_size
        self.parse_budget = parse_budget if parse_budget is not None else config.settings.upload_parse_progress_budget
        if self.chunk_size < 1:
            raise ValueError(f"Chunk size must be at least 1, got: {self.chunk_size}")

    async def upload(
        self,
        rows: List[Dict[str, Any]],
        mailing_name: str,
        on_progress: Optional[ProgressCallback] = None
    ) -> UploadStats:
        """
        Send rows in chunks, tagging each with the mailing name.

        Args:
            rows: Parsed row records, in file order
            mailing_name: Name injected into every record
            on_progress: Called after each chunk with (processed_rows, progress, stats)

        Returns:
            Accumulated counters across all chunks

        Raises:
            UploadError: If any chunk transmission fails. Earlier chunks stay ingested.
        """
        total_rows = len(rows)
        processed = 0
        stats = UploadStats()

        for index, chunk in enumerate(chunk_rows(rows, self.chunk_size), start=1):
            payload = [{**row, MAILING_NAME_FIELD: mailing_name} for row in chunk]

            try:
                response = await self.data_source.upload_mailing_batch(payload)
            except DataSourceException as e:
                logger.error(f"Chunk {index} of mailing '{mailing_name}' failed: {e.message}")
                raise UploadError(e.message or "Falha ao enviar lote", payload=e.payload) from e

            processed += len(chunk)
            stats.novos += int(response.get("totalNovosMalling") or 0)
            stats.duplicados += int(response.get("totalDuplicadosLogs") or 0)
            progress = compute_progress(processed, total_rows, self.parse_budget)

            logger.debug(
                f"Chunk {index} of mailing '{mailing_name}': {len(chunk)} rows, "
                f"{processed}/{total_rows} processed"
            )

            if on_progress is not None:
                result = on_progress(processed, progress, stats)
                if inspect.isawaitable(result):
                    await result

        return stats
