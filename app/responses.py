# =============================================================================
# app/responses.py - File Download Responses
# =============================================================================

from datetime import date

from fastapi.responses import StreamingResponse

from core.models.common import ExportFormat


def spreadsheet_response(content: bytes, media_type: str, basename: str) -> StreamingResponse:
    """
    Stream an export as an attachment named "<basename>-<today>.<ext>".
    """
    extension = ExportFormat.CSV.value if media_type.startswith("text/csv") else ExportFormat.XLSX.value
    filename = f"{basename}-{date.today().isoformat()}.{extension}"

    return StreamingResponse(
        iter([content]),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
