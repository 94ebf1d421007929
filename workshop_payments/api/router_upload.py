"""
Upload endpoint: decode an xlsx/csv dataset and replace the workspace data.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from workshop_payments.api.dependencies import get_workspace, http_errors
from workshop_payments.api.response_models import IngestResponse
from workshop_payments.data.loader import read_workbook
from workshop_payments.workspace import Workspace

router = APIRouter(prefix="/api", tags=["upload"])


@router.post("/upload", response_model=IngestResponse)
async def upload_dataset(file: UploadFile = File(...), ws: Workspace = Depends(get_workspace)):
    """Replace all sheets with the uploaded dataset.

    The read is the only await; if the data was replaced while it was
    pending, this upload is dropped as stale (409).
    """
    if not file.filename:
        raise HTTPException(400, "Missing filename")

    ticket = ws.ingest_ticket()
    content = await file.read()

    with http_errors():
        workbook = read_workbook(content, filename=file.filename)

    if not ws.ingest(workbook, expected=ticket):
        raise HTTPException(409, "Data changed while the upload was being read; upload ignored")

    return IngestResponse(
        status="loaded",
        filename=file.filename,
        sheets=ws.store.sheet_names(),
        rows=ws.store.row_count(),
    )
