"""
Live data source backed by the remote call-center HTTP API.
"""
from typing import Any, Dict, List, Optional
import httpx
from mailing_dashboard.core import config
from mailing_dashboard.core.exceptions import DataSourceException
from mailing_dashboard.core.logging_config import get_logger
from mailing_dashboard.repositories.data_source import DataSource

logger = get_logger("repositories.api")


class ApiDataSource(DataSource):
    """Data source that talks to the remote call-center API over HTTP."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.settings = config.settings
        self.client = client or httpx.AsyncClient(
            base_url=self.settings.remote_api_base_url,
            timeout=self.settings.remote_api_timeout_seconds
        )

    async def upload_mailing_batch(self, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        return await self._request("POST", self.settings.mailing_upload_endpoint, json={"data": rows})

    async def fetch_mailings_list(self, nome: Optional[str] = None, data: Optional[str] = None) -> Dict[str, Any]:
        params = {}
        if nome:
            params["nome"] = nome
        if data:
            params["data"] = data
        return await self._request("GET", self.settings.mailings_list_endpoint, params=params)

    async def fetch_compatible_data(self, mailings: List[str], page: int, limit: int) -> Dict[str, Any]:
        body = {"mailings": list(mailings), "page": page, "limit": limit}
        return await self._request("POST", self.settings.compatible_data_endpoint, json=body)

    async def fetch_recordings(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("GET", self.settings.recordings_endpoint, params=_query_params(params))

    async def fetch_mailing_stats(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("GET", self.settings.mailing_stats_endpoint, params=_query_params(params))

    async def fetch_lists(self) -> Any:
        return await self._request("GET", self.settings.lists_endpoint)

    async def close(self) -> None:
        await self.client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        """
        Issue a request and decode its JSON body.

        Raises:
            DataSourceException: On transport failure, non-2xx status, or a non-JSON body
        """
        logger.debug(f"{method} {path}")
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"Transport failure calling {method} {path}: {e}")
            raise DataSourceException(f"Failed to reach {path}: {str(e)}") from e

        if not response.is_success:
            payload = _safe_json(response)
            message = _error_text(payload) or f"API Error: {response.status_code} {response.reason_phrase}"
            logger.warning(f"{method} {path} returned {response.status_code}: {message}")
            raise DataSourceException(message, status_code=response.status_code, payload=payload)

        try:
            return response.json()
        except ValueError as e:
            raise DataSourceException(f"Invalid JSON response from {path}") from e


def _query_params(params: Dict[str, Any]) -> Dict[str, Any]:
    """Drop empty filters and render booleans the way the remote API expects."""
    query = {}
    for key, value in params.items():
        if value is None or value == "":
            continue
        query[key] = str(value).lower() if isinstance(value, bool) else value
    return query


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


def _error_text(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        for key in ("error", "message", "detail"):
            if payload.get(key):
                return str(payload[key])
        return None
    if isinstance(payload, str) and payload.strip():
        return payload.strip()
    return None
