"""
Paginated Exporter for the mailing compatibility report.
Fetches every page of compatible records for a mailing selection and
renders them as an XLSX workbook.
"""
import asyncio
import io
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font, PatternFill
from mailing_dashboard.core import config
from mailing_dashboard.core.exceptions import (
    DataSourceException,
    ExportError,
    NoDataError,
    ValidationException
)
from mailing_dashboard.core.logging_config import get_logger
from mailing_dashboard.models.mailing_selection import MailingSelection
from mailing_dashboard.repositories.data_source import DataSource

logger = get_logger("services.exporter")

SHEET_TITLE = "Compatíveis"
FILENAME_PREFIX = "Relatorio_Compativel_CEPs"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@dataclass
class ExportArtifact:
    """A generated spreadsheet ready for download."""
    filename: str
    content: bytes
    row_count: int
    media_type: str = XLSX_MEDIA_TYPE


def export_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"{FILENAME_PREFIX}_{now.strftime('%Y-%m-%d')}.xlsx"


def build_workbook(records: List[Dict[str, Any]], sheet_title: str = SHEET_TITLE) -> bytes:
    """
    Serialize records into an XLSX workbook.

    Columns follow the key order of the first record. Keys that first show up
    in a later record are appended after them, and keys missing from a record
    are left blank. Control characters that XLSX cannot store are dropped.
    """
    columns = list(dict.fromkeys(key for record in records for key in record))

    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = sheet_title

    header_font = Font(bold=True, color="FFFFFF", name="Calibri")
    header_fill = PatternFill(start_color="2F5496", end_color="2F5496", fill_type="solid")

    worksheet.append([_cell_text(column) for column in columns])
    for cell in worksheet[1]:
        cell.font = header_font
        cell.fill = header_fill

    for record in records:
        worksheet.append([_cell_text(record.get(column)) for column in columns])

    output = io.BytesIO()
    workbook.save(output)
    return output.getvalue()


def _cell_text(value: Any) -> Any:
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


class PaginatedExporter:
    """Service for the multi-mailing compatibility export."""

    def __init__(
        self,
        data_source: DataSource,
        page_size: Optional[int] = None,
        page_delay_seconds: Optional[float] = None
    ):
        self.data_source = data_source
        self.page_size = page_size if page_size is not None else config.settings.export_page_size
        self.page_delay_seconds = (
            page_delay_seconds if page_delay_seconds is not None
            else config.settings.export_page_delay_seconds
        )

    async def fetch_all(self, selection: MailingSelection) -> List[Dict[str, Any]]:
        """
        Accumulate every page of compatible records for the selection.

        Stops on the first empty page or once the page index passes the
        latest reported totalPages.

        Raises:
            ValidationException: If the selection is empty
            ExportError: If any page fetch fails; nothing accumulated is returned
        """
        if selection.is_empty:
            raise ValidationException("Select at least one mailing to export")

        mailings = selection.to_list()
        accumulator: List[Dict[str, Any]] = []
        page = 1

        while True:
            logger.info(f"Fetching compatibility page {page} for {len(mailings)} mailing(s)")
            try:
                response = await self.data_source.fetch_compatible_data(mailings, page, self.page_size)
            except DataSourceException as e:
                logger.error(f"Export aborted on page {page}: {e.message}")
                raise ExportError(f"Erro ao exportar: {e.message}") from e

            records = response.get("dados") or []
            if not records:
                break

            accumulator.extend(records)
            total_pages = int(response.get("totalPages") or 0)
            page += 1
            if page > total_pages:
                break

            await asyncio.sleep(self.page_delay_seconds)

        return accumulator

    async def export(self, selection: MailingSelection) -> ExportArtifact:
        """
        Fetch all compatible records and render the downloadable workbook.

        Raises:
            NoDataError: If no page returned any record
            ExportError: If any page fetch fails
        """
        records = await self.fetch_all(selection)

        if not records:
            logger.info("No compatible data found for the selected mailings")
            raise NoDataError("Nenhum dado compatível encontrado para os mailings selecionados.")

        logger.info(f"Generating workbook with {len(records)} records")
        content = await asyncio.to_thread(build_workbook, records)
        return ExportArtifact(filename=export_filename(), content=content, row_count=len(records))
