"""
Meta endpoints: health, sheet list, saved-state management.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from workshop_payments.api.dependencies import get_workspace
from workshop_payments.api.response_models import HealthResponse, SheetsResponse
from workshop_payments.workspace import Workspace

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
async def health(ws: Workspace = Depends(get_workspace)):
    return HealthResponse(
        status="ok",
        sheets=len(ws.store.sheet_names()),
        rows=ws.store.row_count(),
        snapshot_saved=ws.snapshots.exists() if ws.snapshots is not None else False,
    )


@router.get("/sheets", response_model=SheetsResponse)
async def list_sheets(ws: Workspace = Depends(get_workspace)):
    return SheetsResponse(sheets=ws.store.sheet_names(), active_sheet=ws.view.active_sheet)


@router.post("/state/save")
async def save_state(ws: Workspace = Depends(get_workspace)):
    """Persist now. A failed write is reported, never raised."""
    return {"status": "saved" if ws.save() else "not_saved"}


@router.post("/state/restore", response_model=SheetsResponse)
async def restore_state(ws: Workspace = Depends(get_workspace)):
    ws.restore()
    return SheetsResponse(sheets=ws.store.sheet_names(), active_sheet=ws.view.active_sheet)


@router.delete("/state")
async def clear_state(ws: Workspace = Depends(get_workspace)):
    """Forget the saved snapshot and start over with no data."""
    cleared = ws.clear_saved()
    return {"status": "cleared" if cleared else "not_cleared"}
