"""
Row Source Adapter for uploaded mailing spreadsheets.
Turns a CSV or XLSX file into an ordered list of row mappings.
"""
import asyncio
import csv
import io
import zipfile
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from mailing_dashboard.core.exceptions import ParseError
from mailing_dashboard.core.logging_config import get_logger

logger = get_logger("services.row_source")

RowRecord = Dict[str, Any]

# SyntaxError covers malformed sheet XML from both ElementTree and lxml
WORKBOOK_ERRORS = (
    InvalidFileException,
    zipfile.BadZipFile,
    KeyError,
    ValueError,
    TypeError,
    IndexError,
    OSError,
    SyntaxError,
)


class RowSourceAdapter:
    """Service for reading tabular upload files."""

    CSV_EXTENSIONS = ('.csv',)
    EXCEL_EXTENSIONS = ('.xlsx', '.xlsm')

    @classmethod
    def supported_extensions(cls) -> tuple:
        return cls.CSV_EXTENSIONS + cls.EXCEL_EXTENSIONS

    def is_supported(self, filename: str) -> bool:
        return filename.lower().endswith(self.supported_extensions())

    async def parse(self, filename: str, content: bytes) -> List[RowRecord]:
        """
        Parse a file into row records without blocking the event loop.

        Args:
            filename: Original filename, used to pick the format
            content: Raw file bytes

        Returns:
            Rows of the first sheet in file order, keyed by header

        Raises:
            ParseError: If the file cannot be decoded as tabular data
        """
        return await asyncio.to_thread(self.parse_sync, filename, content)

    def parse_sync(self, filename: str, content: bytes) -> List[RowRecord]:
        lowered = filename.lower()
        if lowered.endswith(self.CSV_EXTENSIONS):
            rows = self._parse_csv(content)
        elif lowered.endswith(self.EXCEL_EXTENSIONS):
            rows = self._parse_excel(content)
        else:
            raise ParseError(f"Unsupported file type: {filename}")

        logger.info(f"Parsed {len(rows)} rows from {filename}")
        return rows

    def _parse_csv(self, content: bytes) -> List[RowRecord]:
        try:
            text = content.decode('utf-8-sig')
        except UnicodeDecodeError:
            text = content.decode('latin-1')

        if '\x00' in text:
            raise ParseError("File is not a valid CSV: binary content found")

        try:
            reader = csv.DictReader(io.StringIO(text))
            headers = [h.strip() for h in (reader.fieldnames or []) if h and h.strip()]
            if not headers:
                raise ParseError("CSV header row is missing")

            rows = []
            for row in reader:
                record = {key.strip(): value for key, value in row.items() if key and key.strip()}
                if any(value not in (None, "") for value in record.values()):
                    rows.append(record)
            return rows
        except csv.Error as e:
            raise ParseError(f"Failed to parse CSV file: {str(e)}") from e

    def _parse_excel(self, content: bytes) -> List[RowRecord]:
        try:
            workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
        except WORKBOOK_ERRORS as e:
            raise ParseError(f"Failed to read spreadsheet: {str(e)}") from e

        try:
            return self._read_first_sheet(workbook)
        except WORKBOOK_ERRORS as e:
            raise ParseError(f"Failed to read spreadsheet: {str(e)}") from e
        finally:
            workbook.close()

    def _read_first_sheet(self, workbook) -> List[RowRecord]:
        # read_only sheets parse their XML lazily, so corrupt rows only fail here
        sheet = workbook.worksheets[0]
        rows_iter = sheet.iter_rows(values_only=True)
        header_row = next(rows_iter, None)

        indexed_headers = [
            (index, str(value).strip())
            for index, value in enumerate(header_row or [])
            if value is not None and str(value).strip()
        ]
        if not indexed_headers:
            raise ParseError("Spreadsheet header row is missing")

        rows = []
        for values in rows_iter:
            record = {
                header: _cell_value(values[index]) if index < len(values) else None
                for index, header in indexed_headers
            }
            if any(value not in (None, "") for value in record.values()):
                rows.append(record)
        return rows


def _cell_value(value: Any) -> Any:
    """Render date and duration cells as strings so rows stay JSON-serializable."""
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return _format_duration(value)
    return value


def _format_duration(value: timedelta) -> str:
    """Format a duration the way Excel shows [h]:mm:ss, e.g. 30:00:00."""
    total = round(value.total_seconds())
    sign = "-" if total < 0 else ""
    hours, remainder = divmod(abs(total), 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{sign}{hours}:{minutes:02d}:{seconds:02d}"
