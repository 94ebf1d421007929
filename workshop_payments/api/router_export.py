"""
Export endpoints: whole workbook as xlsx, active sheet as CSV.
"""
from __future__ import annotations

from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from workshop_payments.api.dependencies import get_workspace, http_errors
from workshop_payments.config import CSV_MEDIA_TYPE, XLSX_MEDIA_TYPE
from workshop_payments.reports import payments_export
from workshop_payments.workspace import Workspace

router = APIRouter(prefix="/api/export", tags=["export"])


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"}


@router.get("/xlsx")
async def export_xlsx(ws: Workspace = Depends(get_workspace)):
    """All sheets, each with a TOTAL row."""
    if not ws.has_data:
        raise HTTPException(404, "Nothing to export")
    content = payments_export.generate_excel_bytes(ws.store)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers=_attachment(payments_export.workbook_filename()),
    )


@router.get("/csv")
async def export_csv(ws: Workspace = Depends(get_workspace)):
    """The active sheet only, in stored order."""
    sheet = ws.view.active_sheet
    if not sheet:
        raise HTTPException(404, "No sheet selected")
    with http_errors():
        text = payments_export.generate_csv(ws.store, sheet)
    return Response(
        content=text,
        media_type=CSV_MEDIA_TYPE,
        headers=_attachment(payments_export.csv_filename(sheet)),
    )
