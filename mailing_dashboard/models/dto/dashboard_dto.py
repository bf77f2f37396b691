"""
Data Transfer Objects for the dashboard read endpoints.
Field names follow the remote call-center API payloads.
"""
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class DispositionType:
    """Call dispositions reported by the dialer."""
    ALL = ""
    ANSWERED = "ANSWERED"
    NO_ANSWER = "NO ANSWER"
    BUSY = "BUSY"
    FAILED = "FAILED"

    VALUES = (ANSWERED, NO_ANSWER, BUSY, FAILED)


class RecordingFilters(BaseModel):
    """Query filters for the recordings listing."""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    lista_nome: Optional[str] = None
    disposition: Optional[str] = None
    sem_lista: bool = False
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=15, ge=1, le=1000)


class Recording(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    calldate: str
    src: str = ""
    dst: str = ""
    duration: Union[int, str] = 0
    billsec: Union[int, str] = 0
    disposition: str = ""
    gravacao: Optional[str] = None
    destino: str = ""
    cml_nome: str = ""
    lista_nome: Optional[str] = None
    cml_id: Optional[int] = None
    tipomailing: str = ""
    usr_nome: str = ""
    data_insercao: str = ""


class PaginationMeta(BaseModel):
    paginaAtual: int = 1
    porPagina: int = 0
    totalPages: int = 0
    temProximaPagina: bool = False
    temPaginaAnterior: bool = False


class DispositionCount(BaseModel):
    name: str
    value: int


class DailyCallCount(BaseModel):
    date: str
    calls: int


class RecordingStats(BaseModel):
    """Statistics derived from the current recordings page."""
    total: int = 0
    avg_duration: int = 0
    success_rate: int = 0
    dispositions: list[DispositionCount] = Field(default_factory=list)
    calls_per_day: list[DailyCallCount] = Field(default_factory=list)


class RecordingsResponse(BaseModel):
    dados: list[Recording] = Field(default_factory=list)
    paginacao: Optional[PaginationMeta] = None
    stats: RecordingStats = Field(default_factory=RecordingStats)


class MailingStatsFilters(BaseModel):
    nome: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=15, ge=1, le=1000)


class MailingStat(BaseModel):
    model_config = ConfigDict(extra="allow")

    nome_malling: str
    total_registros: int = 0
    total_telefones_unicos: int = 0
    total_duplicados: int = 0
    total_geral: int = 0
    taxa_duplicacao: float = 0
    data_primeira_insercao: Optional[str] = None
    data_ultima_insercao: Optional[str] = None


class MailingGeneralStats(BaseModel):
    total_registros: int = 0
    total_telefones_unicos: int = 0
    total_duplicados: int = 0
    total_geral: int = 0
    taxa_duplicacao_geral: float = 0


class MailingStatsResponse(BaseModel):
    totalMailings: int = 0
    totaisGerais: MailingGeneralStats = Field(default_factory=MailingGeneralStats)
    estatisticas: list[MailingStat] = Field(default_factory=list)
    paginacao: PaginationMeta = Field(default_factory=PaginationMeta)


class MailingListResponse(BaseModel):
    mailings: list[str] = Field(default_factory=list)
    total: int = 0


class ListsResponse(BaseModel):
    listas: list[str] = Field(default_factory=list)
    total: int = 0
