"""
Dashboard read routes.
Recordings, mailing statistics, mailing names and dialer lists.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from mailing_dashboard.core import config
from mailing_dashboard.core.dependencies import get_dashboard_service
from mailing_dashboard.models.dto.dashboard_dto import (
    ListsResponse,
    MailingListResponse,
    MailingStatsFilters,
    MailingStatsResponse,
    RecordingFilters,
    RecordingsResponse
)
from mailing_dashboard.services.dashboard_service import DashboardService

router = APIRouter(prefix="/v1/api")


@router.get("/recordings", tags=["Recordings"], response_model=RecordingsResponse)
async def get_recordings(
    start_date: Optional[str] = Query(default=None, description="Earliest call date"),
    end_date: Optional[str] = Query(default=None, description="Latest call date"),
    lista_nome: Optional[str] = Query(default=None, description="List name substring"),
    disposition: Optional[str] = Query(default=None, description="ANSWERED, NO ANSWER, BUSY or FAILED"),
    sem_lista: bool = Query(default=False, description="Only calls without a list"),
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1, le=1000, description="Page size, defaults to DEFAULT_PAGE_SIZE"),
    dashboard_service: DashboardService = Depends(get_dashboard_service)
):
    """
    Retrieve a page of call recordings with statistics for that page.
    """
    filters = RecordingFilters(
        start_date=start_date,
        end_date=end_date,
        lista_nome=lista_nome,
        disposition=disposition,
        sem_lista=sem_lista,
        page=page,
        limit=limit or config.settings.default_page_size
    )
    return await dashboard_service.get_recordings(filters)


@router.get("/mailings/stats", tags=["Mailings"], response_model=MailingStatsResponse)
async def get_mailing_stats(
    nome: Optional[str] = Query(default=None, description="Mailing name substring"),
    start_date: Optional[str] = Query(default=None),
    end_date: Optional[str] = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1, le=1000, description="Page size, defaults to DEFAULT_PAGE_SIZE"),
    dashboard_service: DashboardService = Depends(get_dashboard_service)
):
    """
    Retrieve mailing import statistics and general totals.
    """
    filters = MailingStatsFilters(
        nome=nome,
        start_date=start_date,
        end_date=end_date,
        page=page,
        limit=limit or config.settings.default_page_size
    )
    return await dashboard_service.get_mailing_stats(filters)


@router.get("/mailings", tags=["Mailings"], response_model=MailingListResponse)
async def get_mailings(
    nome: Optional[str] = Query(default=None, description="Mailing name substring"),
    data: Optional[str] = Query(default=None, description="Import date (YYYY-MM-DD)"),
    dashboard_service: DashboardService = Depends(get_dashboard_service)
):
    """
    List mailing names available for comparison.
    """
    return await dashboard_service.get_mailings(nome, data)


@router.get("/lists", tags=["Lists"], response_model=ListsResponse)
async def get_lists(dashboard_service: DashboardService = Depends(get_dashboard_service)):
    """
    List dialer lists.
    """
    return await dashboard_service.get_lists()
