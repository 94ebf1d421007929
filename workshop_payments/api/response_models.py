"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel

from workshop_payments.data.query import SheetView

SortKeyName = Literal["who", "why", "amount"]


class HealthResponse(BaseModel):
    status: str
    sheets: int
    rows: int
    snapshot_saved: bool


class SheetsResponse(BaseModel):
    sheets: list[str]
    active_sheet: Optional[str] = None


class RowModel(BaseModel):
    who: str
    why: str
    amount: float


class ViewRowModel(RowModel):
    position: int  # index into stored order; use it for edit/delete


class SheetViewResponse(BaseModel):
    sheet: Optional[str] = None
    rows: list[ViewRowModel]
    row_count: int
    total: float
    sheet_total: float
    person_total: Optional[float] = None
    people: list[str]
    person_filter: Optional[str] = None
    sort_key: Optional[SortKeyName] = None
    ascending: bool = True
    editing_position: Optional[int] = None

    @staticmethod
    def from_view(view: SheetView, editing_position: Optional[int] = None) -> "SheetViewResponse":
        return SheetViewResponse(
            sheet=view.sheet,
            rows=[
                ViewRowModel(who=e.row.who, why=e.row.why, amount=e.row.amount, position=e.position)
                for e in view.entries
            ],
            row_count=view.row_count,
            total=view.total,
            sheet_total=view.sheet_total,
            person_total=view.person_total,
            people=view.people,
            person_filter=view.person_filter,
            sort_key=view.sort.key.value if view.sort.key else None,
            ascending=view.sort.ascending,
            editing_position=editing_position,
        )


class RowRequest(BaseModel):
    who: str = ""
    why: str = ""
    amount: Union[float, str, None] = None  # coerced; unparseable text becomes 0


class ActivateRequest(BaseModel):
    sheet: Optional[str] = None


class SortRequest(BaseModel):
    key: Optional[SortKeyName] = None
    ascending: Optional[bool] = None  # omitted → toggle like a header click


class FilterRequest(BaseModel):
    person: Optional[str] = None


class IngestResponse(BaseModel):
    status: str
    filename: str
    sheets: list[str]
    rows: int
