"""
RowStore — in-memory sheets of payment rows.

Owns every Row. Sheet order is the order sheets were loaded; row order is
insertion order and is never changed by sorting (sorting lives in
workshop_payments.data.query).
"""
from __future__ import annotations

from typing import Iterable, Mapping

import pandas as pd

from workshop_payments.data.normalize import coerce_amount, normalize_table
from workshop_payments.data.query import rows_frame
from workshop_payments.data.schemas import Row
from workshop_payments.errors import RowReferenceError, ValidationError
from workshop_payments.logging_setup import get_logger

logger = get_logger(__name__)


def _validated_row(who: object, why: object, amount: object) -> Row:
    who = "" if who is None else str(who).strip()
    why = "" if why is None else str(why).strip()
    if not who or not why:
        missing = [name for name, value in (("who", who), ("why", why)) if not value]
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")
    return Row(who=who, why=why, amount=coerce_amount(amount))


class RowStore:
    """Sheet name → ordered list of rows, with CRUD by position."""

    def __init__(self) -> None:
        self.sheets: dict[str, list[Row]] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_sheets(self, raw_tables: Mapping[str, Iterable[Mapping]]) -> "RowStore":
        """Replace all content with normalised rows from each raw table."""
        self.sheets = {str(name): normalize_table(records) for name, records in raw_tables.items()}
        logger.info(
            "Loaded %d sheet(s), %d row(s)", len(self.sheets), self.row_count()
        )
        return self

    def replace(self, sheets: Mapping[str, Iterable[Row]]) -> "RowStore":
        """Replace all content with already-canonical rows."""
        self.sheets = {str(name): list(rows) for name, rows in sheets.items()}
        return self

    def reset(self) -> None:
        self.sheets = {}

    @property
    def is_empty(self) -> bool:
        return not self.sheets

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def sheet_names(self) -> list[str]:
        return list(self.sheets)

    def has_sheet(self, sheet: str | None) -> bool:
        return sheet is not None and sheet in self.sheets

    def rows(self, sheet: str | None) -> list[Row]:
        """Copy of a sheet's rows in stored order; [] for an unknown sheet."""
        if not self.has_sheet(sheet):
            return []
        return list(self.sheets[sheet])

    def row_at(self, sheet: str, position: int) -> Row:
        rows = self._require(sheet)
        self._check_position(sheet, rows, position)
        return rows[position]

    def row_count(self, sheet: str | None = None) -> int:
        if sheet is None:
            return sum(len(rows) for rows in self.sheets.values())
        return len(self.rows(sheet))

    def total(self, sheet: str | None) -> float:
        """Sum of every amount in the sheet (ignores any view filter)."""
        return float(sum(row.amount for row in self.rows(sheet)))

    def to_frame(self, sheet: str | None) -> pd.DataFrame:
        """Sheet as a DataFrame with a `position` column (index into stored order)."""
        return rows_frame(self.rows(sheet))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def append(self, sheet: str, who: object, why: object, amount: object) -> Row:
        """Add a row at the end of the sheet. who and why are required."""
        row = _validated_row(who, why, amount)
        self._require(sheet).append(row)
        return row

    def edit_at(self, sheet: str, position: int, who: object, why: object, amount: object) -> Row:
        """Overwrite the row at `position` in place."""
        row = _validated_row(who, why, amount)
        rows = self._require(sheet)
        self._check_position(sheet, rows, position)
        rows[position] = row
        return row

    def delete_at(self, sheet: str, position: int) -> Row:
        """Remove the row at `position`; later rows shift down by one.

        Callers holding positions into this sheet must adjust them.
        """
        rows = self._require(sheet)
        self._check_position(sheet, rows, position)
        return rows.pop(position)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require(self, sheet: str | None) -> list[Row]:
        if not self.has_sheet(sheet):
            raise RowReferenceError(f"Sheet not found: {sheet!r}")
        return self.sheets[sheet]

    @staticmethod
    def _check_position(sheet: str, rows: list[Row], position: int) -> None:
        if isinstance(position, bool) or not isinstance(position, int) or not 0 <= position < len(rows):
            raise RowReferenceError(f"No row at position {position!r} in sheet {sheet!r}")
