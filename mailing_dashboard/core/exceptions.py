"""
Custom exceptions for the Mailing Dashboard API.
Provides specific error types for different failure scenarios.
"""
from typing import Any, Optional


class MailingDashboardException(Exception):
    """Base exception for all application errors."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ValidationException(MailingDashboardException):
    """Raised when request data validation fails."""
    pass


class ParseError(MailingDashboardException):
    """Raised when an uploaded file cannot be decoded as tabular data."""
    pass


class DataSourceException(MailingDashboardException):
    """Raised when a call to the remote call-center API fails."""
    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)


class UploadError(MailingDashboardException):
    """Raised when a mailing chunk transmission fails."""
    def __init__(self, message: str, payload: Any = None):
        self.payload = payload
        super().__init__(message)


class NoDataError(MailingDashboardException):
    """Raised when a compatibility export finds no rows at all."""
    pass


class ExportError(MailingDashboardException):
    """Raised when a compatibility export is aborted by a failed page fetch."""
    pass


class QueueLockedException(MailingDashboardException):
    """Raised when the upload queue is mutated while a run is active."""
    pass


class QueueItemNotFoundException(MailingDashboardException):
    """Raised when a queue item id is unknown."""
    pass


class InvalidStateTransitionException(MailingDashboardException):
    """Raised when a queue item is moved to a state its lifecycle forbids."""
    pass
