"""
Query engine — filtered, sorted view of one sheet plus its totals.

Pure: reads rows and a ViewState, never mutates either.
"""
from __future__ import annotations

import locale
from dataclasses import dataclass, field
from typing import Optional, Sequence

import pandas as pd

from workshop_payments.config import CANONICAL_FIELDS
from workshop_payments.data.schemas import Row, SortKey, SortSpec, ViewState


@dataclass(frozen=True)
class ViewEntry:
    row: Row
    position: int  # index in the unfiltered, unsorted sheet


@dataclass
class SheetView:
    """What the table shows for the active sheet."""
    sheet: Optional[str] = None
    entries: list[ViewEntry] = field(default_factory=list)
    total: float = 0.0                      # over the filtered rows
    person_total: Optional[float] = None    # None when no person filter is active
    people: list[str] = field(default_factory=list)
    person_filter: Optional[str] = None     # the filter actually applied
    sort: SortSpec = field(default_factory=SortSpec)
    sheet_total: float = 0.0
    row_count: int = 0

    @property
    def positions(self) -> list[int]:
        return [e.position for e in self.entries]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def rows_frame(rows: Sequence[Row]) -> pd.DataFrame:
    """Rows as a DataFrame with a `position` column (index into stored order)."""
    frame = pd.DataFrame([r.to_json() for r in rows], columns=CANONICAL_FIELDS)
    frame["amount"] = frame["amount"].astype(float)
    frame["position"] = range(len(frame))
    return frame


def _locale_key(text: str) -> tuple[str, str]:
    # case-folded collation key; exact text breaks ties
    return locale.strxfrm(text.casefold()), text


def distinct_people(rows: Sequence[Row]) -> list[str]:
    """Non-empty trimmed payees, deduplicated, in case-insensitive locale order."""
    if not rows:
        return []
    who = pd.Series([r.who for r in rows], dtype=object).str.strip()
    names = who[who != ""].unique().tolist()
    return sorted(names, key=_locale_key)


def _sort_frame(frame: pd.DataFrame, sort: SortSpec) -> pd.DataFrame:
    if sort.key is None or frame.empty:
        return frame
    key_fn = None if sort.key == SortKey.AMOUNT else (lambda col: col.str.lower())
    # mergesort is stable, so ties keep sheet order in both directions
    return frame.sort_values(
        SortKey(sort.key).value, ascending=sort.ascending, kind="mergesort", key=key_fn
    )


# ---------------------------------------------------------------------------
# Query
# ---------------------------------------------------------------------------

def query_sheet(rows: Sequence[Row], view: ViewState) -> SheetView:
    """Filter by person, sort, and total a sheet's rows for display.

    A person filter that no longer matches anyone in the sheet is dropped;
    the returned `person_filter` tells the caller which filter was applied.
    """
    rows = list(rows)
    people = distinct_people(rows)
    person = view.person_filter if view.person_filter in people else None

    frame = rows_frame(rows)
    if person is not None:
        frame = frame[frame["who"].str.strip() == person]
    frame = _sort_frame(frame, view.sort)

    entries = [ViewEntry(row=rows[pos], position=pos) for pos in frame["position"].astype(int).tolist()]
    total = float(frame["amount"].sum()) if not frame.empty else 0.0

    return SheetView(
        sheet=view.active_sheet,
        entries=entries,
        total=total,
        person_total=total if person is not None else None,
        people=people,
        person_filter=person,
        sort=SortSpec(view.sort.key, view.sort.ascending),
        sheet_total=float(sum(r.amount for r in rows)),
        row_count=len(rows),
    )
