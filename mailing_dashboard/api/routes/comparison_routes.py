"""
Mailing comparison routes.
Exports the compatible records of a mailing selection as a spreadsheet.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import Response
from mailing_dashboard.core.dependencies import get_exporter
from mailing_dashboard.models.dto.mailing_dto import ComparisonExportRequest
from mailing_dashboard.models.mailing_selection import MailingSelection
from mailing_dashboard.services.exporter import PaginatedExporter

router = APIRouter(prefix="/v1/api/comparisons", tags=["Comparisons"])


@router.post("/export")
async def export_compatible_data(
    request: ComparisonExportRequest,
    exporter: PaginatedExporter = Depends(get_exporter)
):
    """
    Download every compatible record of the selected mailings as XLSX.

    - **mailings**: at least one mailing name; duplicates are ignored
    """
    artifact = await exporter.export(MailingSelection(request.mailings))
    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{artifact.filename}"',
            "X-Total-Records": str(artifact.row_count)
        }
    )
