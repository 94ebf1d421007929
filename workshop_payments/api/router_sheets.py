"""
Sheet view and row endpoints: select, sort, filter, add, edit, delete.

Handlers are `async def` so every command runs on the event loop, one at a
time, never in the threadpool.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from workshop_payments.api.dependencies import get_workspace, http_errors
from workshop_payments.api.response_models import (
    ActivateRequest, FilterRequest, RowModel, RowRequest, SheetViewResponse, SortRequest,
)
from workshop_payments.workspace import Workspace

router = APIRouter(prefix="/api", tags=["sheets"])


def _view(ws: Workspace) -> SheetViewResponse:
    return SheetViewResponse.from_view(ws.current_view(), ws.view.editing_position)


# ---------------------------------------------------------------------------
# View
# ---------------------------------------------------------------------------

@router.get("/view", response_model=SheetViewResponse)
async def get_view(ws: Workspace = Depends(get_workspace)):
    """Filtered/sorted rows of the active sheet with totals and people list."""
    return _view(ws)


@router.put("/view/sheet", response_model=SheetViewResponse)
async def activate_sheet(req: ActivateRequest, ws: Workspace = Depends(get_workspace)):
    with http_errors():
        ws.set_active_sheet(req.sheet)
    return _view(ws)


@router.post("/view/sort", response_model=SheetViewResponse)
async def sort_view(req: SortRequest, ws: Workspace = Depends(get_workspace)):
    """Toggle sort on `key`, or set it explicitly when `ascending` is given."""
    if req.key is not None and req.ascending is None:
        ws.toggle_sort(req.key)
    else:
        ws.set_sort(req.key, True if req.ascending is None else req.ascending)
    return _view(ws)


@router.put("/view/filter", response_model=SheetViewResponse)
async def filter_view(req: FilterRequest, ws: Workspace = Depends(get_workspace)):
    ws.set_filter(req.person)
    return _view(ws)


# ---------------------------------------------------------------------------
# Rows
# ---------------------------------------------------------------------------

@router.post("/rows", response_model=RowModel, status_code=201)
async def add_row(req: RowRequest, ws: Workspace = Depends(get_workspace)):
    with http_errors():
        row = ws.append(req.who, req.why, req.amount)
    return RowModel(**row.to_json())


@router.put("/rows/{position}", response_model=RowModel)
async def edit_row(position: int, req: RowRequest, ws: Workspace = Depends(get_workspace)):
    with http_errors():
        row = ws.edit_at(position, req.who, req.why, req.amount)
    return RowModel(**row.to_json())


@router.delete("/rows/{position}", response_model=RowModel)
async def delete_row(position: int, ws: Workspace = Depends(get_workspace)):
    with http_errors():
        row = ws.delete_at(position)
    return RowModel(**row.to_json())


# ---------------------------------------------------------------------------
# Edit / save / cancel
# ---------------------------------------------------------------------------

@router.post("/rows/{position}/edit", response_model=SheetViewResponse)
async def begin_edit(position: int, ws: Workspace = Depends(get_workspace)):
    with http_errors():
        ws.begin_edit(position)
    return _view(ws)


@router.post("/edit", response_model=RowModel)
async def commit_edit(req: RowRequest, ws: Workspace = Depends(get_workspace)):
    with http_errors():
        row = ws.commit_edit(req.who, req.why, req.amount)
    return RowModel(**row.to_json())


@router.delete("/edit", response_model=SheetViewResponse)
async def cancel_edit(ws: Workspace = Depends(get_workspace)):
    ws.cancel_edit()
    return _view(ws)
