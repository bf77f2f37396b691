"""
Dependency injection container for FastAPI.
Provides singleton-like behavior for services and repositories.
"""
from functools import lru_cache
from mailing_dashboard.core import config
from mailing_dashboard.core.logging_config import get_logger
from mailing_dashboard.repositories.api_data_source import ApiDataSource
from mailing_dashboard.repositories.data_source import DataSource
from mailing_dashboard.repositories.mock_data_source import MockDataSource
from mailing_dashboard.services.batch_uploader import BatchUploader
from mailing_dashboard.services.dashboard_service import DashboardService
from mailing_dashboard.services.exporter import PaginatedExporter
from mailing_dashboard.services.queue_processor import SequentialQueueProcessor
from mailing_dashboard.services.row_source import RowSourceAdapter
from mailing_dashboard.services.upload_queue import UploadQueue

logger = get_logger("core.dependencies")


@lru_cache()
def get_data_source() -> DataSource:
    """Get the DataSource singleton, chosen once from configuration."""
    if config.settings.use_mock_data:
        logger.warning("Using mock data. Set USE_MOCK_DATA=false to call the real API.")
        return MockDataSource()
    return ApiDataSource()


@lru_cache()
def get_row_source_adapter() -> RowSourceAdapter:
    """Get RowSourceAdapter singleton instance."""
    return RowSourceAdapter()


@lru_cache()
def get_upload_queue() -> UploadQueue:
    """Get UploadQueue singleton instance."""
    return UploadQueue()


@lru_cache()
def get_batch_uploader() -> BatchUploader:
    """Get BatchUploader singleton instance."""
    return BatchUploader(data_source=get_data_source())


@lru_cache()
def get_queue_processor() -> SequentialQueueProcessor:
    """Get SequentialQueueProcessor singleton instance with injected dependencies."""
    return SequentialQueueProcessor(
        queue=get_upload_queue(),
        row_source=get_row_source_adapter(),
        uploader=get_batch_uploader()
    )


@lru_cache()
def get_exporter() -> PaginatedExporter:
    """Get PaginatedExporter singleton instance."""
    return PaginatedExporter(data_source=get_data_source())


@lru_cache()
def get_dashboard_service() -> DashboardService:
    """Get DashboardService singleton instance."""
    return DashboardService(data_source=get_data_source())


def clear_caches() -> None:
    """Forget every singleton so the next request rebuilds them from settings."""
    for factory in (
        get_data_source,
        get_row_source_adapter,
        get_upload_queue,
        get_batch_uploader,
        get_queue_processor,
        get_exporter,
        get_dashboard_service,
    ):
        factory.cache_clear()
