"""
Abstract base class for call-center data sources.
Defines the contract every backend (live API, mock) must honour.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class DataSource(ABC):
    """Abstract data source for the remote call-center API contracts."""

    @abstractmethod
    async def upload_mailing_batch(self, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Send one chunk of mailing rows; returns the ingestion counters."""
        pass

    @abstractmethod
    async def fetch_mailings_list(self, nome: Optional[str] = None, data: Optional[str] = None) -> Dict[str, Any]:
        """List mailing names, optionally filtered by name substring and date."""
        pass

    @abstractmethod
    async def fetch_compatible_data(self, mailings: List[str], page: int, limit: int) -> Dict[str, Any]:
        """Fetch one page of compatibility records for the given mailings."""
        pass

    @abstractmethod
    async def fetch_recordings(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Fetch one page of call recordings."""
        pass

    @abstractmethod
    async def fetch_mailing_stats(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Fetch one page of mailing import statistics."""
        pass

    @abstractmethod
    async def fetch_lists(self) -> Any:
        """Fetch dialer list names."""
        pass

    async def close(self) -> None:
        """Release any held resources."""
        return None
