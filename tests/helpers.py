"""
Test helpers: file builders and a scriptable data source.
"""
import io
from typing import Any, Dict, List, Optional
from openpyxl import Workbook
from mailing_dashboard.core.exceptions import DataSourceException
from mailing_dashboard.repositories.data_source import DataSource


def make_csv(rows: int, header: str = "nome,telefone1,cep") -> bytes:
    """Build a CSV with `rows` data rows."""
    lines = [header]
    for i in range(rows):
        lines.append(f"Contato {i},1199{i:07d},0100{i % 10}000")
    return ("\n".join(lines) + "\n").encode("utf-8")


def make_xlsx(header: List[str], rows: List[List[Any]], extra_sheet: bool = False) -> bytes:
    """Build an XLSX workbook in memory."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(header)
    for row in rows:
        sheet.append(row)
    if extra_sheet:
        other = workbook.create_sheet("Outra")
        other.append(["ignored"])
        other.append(["value"])
    output = io.BytesIO()
    workbook.save(output)
    return output.getvalue()


class FakeDataSource(DataSource):
    """Scriptable DataSource that records every call."""

    def __init__(self):
        self.upload_calls: List[List[Dict[str, Any]]] = []
        self.upload_failures: Dict[int, DataSourceException] = {}
        self.upload_hook = None
        self.compatible_pages: List[Dict[str, Any]] = []
        self.compatible_calls: List[Dict[str, Any]] = []
        self.compatible_failure_on_page: Optional[int] = None
        self.payloads: Dict[str, Any] = {}
        self.failures: Dict[str, DataSourceException] = {}

    async def upload_mailing_batch(self, rows):
        call_number = len(self.upload_calls) + 1
        self.upload_calls.append(rows)
        if self.upload_hook is not None:
            self.upload_hook(rows)
        if call_number in self.upload_failures:
            raise self.upload_failures[call_number]
        return {
            "message": "ok",
            "totalItens": len(rows),
            "totalNovosMalling": len(rows) - 1,
            "totalDuplicadosLogs": 1,
        }

    async def fetch_mailings_list(self, nome=None, data=None):
        return self._answer("mailings", {"nome": nome, "data": data})

    async def fetch_compatible_data(self, mailings, page, limit):
        self.compatible_calls.append({"mailings": list(mailings), "page": page, "limit": limit})
        if self.compatible_failure_on_page == page:
            raise DataSourceException("API Error: 500 Internal Server Error", status_code=500)
        if page <= len(self.compatible_pages):
            return self.compatible_pages[page - 1]
        return {"dados": [], "totalPages": len(self.compatible_pages)}

    async def fetch_recordings(self, params):
        return self._answer("recordings", params)

    async def fetch_mailing_stats(self, params):
        return self._answer("mailing_stats", params)

    async def fetch_lists(self):
        return self._answer("lists", None)

    def _answer(self, key, params):
        self.payloads.setdefault(f"{key}_params", []).append(params)
        if key in self.failures:
            raise self.failures[key]
        return self.payloads.get(key, {})


def compatible_page(size: int, total_pages: int, start: int = 0) -> Dict[str, Any]:
    return {
        "totalPages": total_pages,
        "dados": [
            {
                "id": start + i,
                "nome": f"Contato {start + i}",
                "telefone1": f"1199{start + i:07d}",
                "cep": "01001000",
                "nome_malling": "base_a",
                "data_insercao": "2024-05-01T10:00:00",
            }
            for i in range(size)
        ],
    }
