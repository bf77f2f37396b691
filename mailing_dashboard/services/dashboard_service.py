"""
Dashboard Service for the read-only views.
Fetches recordings, mailing statistics and lists from the data source and
derives the page-level statistics shown on the dashboard.
"""
from collections import Counter, OrderedDict
from datetime import datetime
from typing import Any, List, Optional, Union
from pydantic import ValidationError
from mailing_dashboard.core.exceptions import DataSourceException
from mailing_dashboard.core.logging_config import get_logger
from mailing_dashboard.models.dto.dashboard_dto import (
    DailyCallCount,
    DispositionCount,
    DispositionType,
    ListsResponse,
    MailingGeneralStats,
    MailingListResponse,
    MailingStat,
    MailingStatsFilters,
    MailingStatsResponse,
    PaginationMeta,
    Recording,
    RecordingFilters,
    RecordingsResponse,
    RecordingStats
)
from mailing_dashboard.repositories.data_source import DataSource

logger = get_logger("services.dashboard")


def duration_seconds(value: Union[int, str, None]) -> int:
    """Convert an "HH:MM:SS" duration, or a plain number, to seconds."""
    if value is None or value == "":
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    text = str(value).strip()
    if ":" not in text:
        try:
            return int(float(text))
        except ValueError:
            return 0
    seconds = 0
    try:
        for part in text.split(":"):
            seconds = seconds * 60 + int(part)
    except ValueError:
        return 0
    return seconds


def compute_recording_stats(recordings: List[Recording], total_records: int) -> RecordingStats:
    """
    Derive dashboard statistics from one page of recordings.

    The total comes from the server; averages and rates cover only the page.
    """
    if not recordings:
        return RecordingStats(total=total_records)

    answered = sum(1 for r in recordings if r.disposition == DispositionType.ANSWERED)
    total_duration = sum(duration_seconds(r.duration) for r in recordings)

    disposition_counts = Counter(r.disposition for r in recordings)
    calls_per_day: "OrderedDict[str, int]" = OrderedDict()
    for recording in sorted(recordings, key=lambda r: r.calldate):
        day = _call_day(recording.calldate)
        calls_per_day[day] = calls_per_day.get(day, 0) + 1

    return RecordingStats(
        total=total_records,
        avg_duration=total_duration // len(recordings),
        success_rate=(answered * 100) // len(recordings),
        dispositions=[DispositionCount(name=name, value=count) for name, count in disposition_counts.items()],
        calls_per_day=[DailyCallCount(date=day, calls=count) for day, count in calls_per_day.items()]
    )


def _call_day(calldate: str) -> str:
    try:
        return datetime.fromisoformat(calldate.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return calldate[:10]


class DashboardService:
    """Service for the dashboard's read-only data."""

    def __init__(self, data_source: DataSource):
        self.data_source = data_source

    async def get_recordings(self, filters: RecordingFilters) -> RecordingsResponse:
        """
        Fetch a page of recordings with derived statistics.

        Returns an empty response if the data source fails.
        """
        try:
            payload = await self.data_source.fetch_recordings(filters.model_dump())
            recordings = [Recording(**item) for item in payload.get("dados") or []]
            pagination = payload.get("paginacao")
            total = int(payload.get("totalRegistros") or 0)
        except (DataSourceException, ValidationError) as e:
            logger.warning(f"Failed to load recordings: {e}")
            return RecordingsResponse()

        return RecordingsResponse(
            dados=recordings,
            paginacao=PaginationMeta(**pagination) if pagination else None,
            stats=compute_recording_stats(recordings, total)
        )

    async def get_mailing_stats(self, filters: MailingStatsFilters) -> MailingStatsResponse:
        """Fetch mailing import statistics. Returns zeroed stats if the data source fails."""
        try:
            payload = await self.data_source.fetch_mailing_stats(filters.model_dump())
            return MailingStatsResponse(
                totalMailings=int(payload.get("totalMailings") or 0),
                totaisGerais=MailingGeneralStats(**(payload.get("totaisGerais") or {})),
                estatisticas=[MailingStat(**item) for item in payload.get("estatisticas") or []],
                paginacao=PaginationMeta(
                    paginaAtual=payload.get("paginaAtual", filters.page),
                    porPagina=payload.get("porPagina", filters.limit),
                    totalPages=payload.get("totalPages", 0),
                    temProximaPagina=payload.get("temProximaPagina", False),
                    temPaginaAnterior=payload.get("temPaginaAnterior", False)
                )
            )
        except (DataSourceException, ValidationError) as e:
            logger.warning(f"Failed to load mailing stats: {e}")
            return MailingStatsResponse()

    async def get_mailings(self, nome: Optional[str] = None, data: Optional[str] = None) -> MailingListResponse:
        """List mailing names. Returns an empty list on failure or unsuccessful response."""
        try:
            payload = await self.data_source.fetch_mailings_list(nome, data)
        except DataSourceException as e:
            logger.warning(f"Failed to load mailings list: {e.message}")
            return MailingListResponse()

        if not isinstance(payload, dict):
            payload = {}
        mailings = payload.get("mailings")
        if not payload.get("success") or not isinstance(mailings, list):
            logger.warning(f"Mailings list unavailable: {payload.get('error') or 'unexpected response'}")
            return MailingListResponse()

        names = [str(name) for name in mailings]
        return MailingListResponse(mailings=names, total=len(names))

    async def get_lists(self) -> ListsResponse:
        """List dialer lists. Returns an empty list on failure."""
        try:
            payload = await self.data_source.fetch_lists()
        except DataSourceException as e:
            logger.warning(f"Failed to load lists: {e.message}")
            return ListsResponse()

        names = _list_names(payload)
        return ListsResponse(listas=names, total=len(names))


def _list_names(payload: Any) -> List[str]:
    """Accept either a bare array or an object wrapping one."""
    if isinstance(payload, dict):
        for key in ("listas", "lists", "dados"):
            if isinstance(payload.get(key), list):
                payload = payload[key]
                break
        else:
            return []
    if not isinstance(payload, list):
        return []

    names = []
    for entry in payload:
        if isinstance(entry, dict):
            entry = entry.get("lista_nome") or entry.get("nome")
        if entry:
            names.append(str(entry))
    return names
