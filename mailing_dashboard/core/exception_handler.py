"""
Global exception handler for the Mailing Dashboard API.
Provides centralized error handling for all API exceptions.
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from .exceptions import (
    DataSourceException,
    ExportError,
    InvalidStateTransitionException,
    NoDataError,
    ParseError,
    QueueItemNotFoundException,
    QueueLockedException,
    UploadError,
    ValidationException
)
from .logging_config import get_logger

logger = get_logger("core.exception_handler")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""

    @app.exception_handler(QueueItemNotFoundException)
    async def handle_not_found(request: Request, exc: QueueItemNotFoundException):
        return JSONResponse(
            status_code=404,
            content={"error": "Not Found", "message": exc.message}
        )

    @app.exception_handler(NoDataError)
    async def handle_no_data(request: Request, exc: NoDataError):
        return JSONResponse(
            status_code=404,
            content={"error": "No Data", "message": exc.message}
        )

    @app.exception_handler(ValidationException)
    async def handle_validation_error(request: Request, exc: ValidationException):
        return JSONResponse(
            status_code=400,
            content={"error": "Validation Error", "message": exc.message}
        )

    @app.exception_handler(ParseError)
    async def handle_parse_error(request: Request, exc: ParseError):
        return JSONResponse(
            status_code=400,
            content={"error": "File Parsing Failed", "message": exc.message}
        )

    @app.exception_handler(QueueLockedException)
    async def handle_queue_locked(request: Request, exc: QueueLockedException):
        return JSONResponse(
            status_code=409,
            content={"error": "Queue Locked", "message": exc.message}
        )

    @app.exception_handler(InvalidStateTransitionException)
    async def handle_invalid_transition(request: Request, exc: InvalidStateTransitionException):
        return JSONResponse(
            status_code=409,
            content={"error": "Invalid State", "message": exc.message}
        )

    @app.exception_handler(UploadError)
    async def handle_upload_error(request: Request, exc: UploadError):
        return JSONResponse(
            status_code=502,
            content={"error": "Upload Failed", "message": exc.message}
        )

    @app.exception_handler(ExportError)
    async def handle_export_error(request: Request, exc: ExportError):
        return JSONResponse(
            status_code=502,
            content={"error": "Export Failed", "message": exc.message}
        )

    @app.exception_handler(DataSourceException)
    async def handle_data_source_error(request: Request, exc: DataSourceException):
        return JSONResponse(
            status_code=502,
            content={"error": "Remote API Error", "message": exc.message}
        )

    @app.exception_handler(Exception)
    async def handle_generic_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal Server Error", "message": "An unexpected error occurred"}
        )
