"""
ExcelWriter — builds the styled payments workbook, one tab per sheet.
"""
from __future__ import annotations

import io
import re
from pathlib import Path

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from workshop_payments.excel.formatters import (
    auto_column_width,
    format_data_cell,
    format_header_row,
)


ColSpec = tuple[str, str, str]  # (record key, "text" | "amount", header label)

_INVALID_TITLE_RE = re.compile(r"[\\*?:/\[\]]")
MAX_TITLE_LENGTH = 31


def safe_sheet_title(name: str) -> str:
    """Excel tab titles: no \\ * ? : / [ ], at most 31 characters, never empty."""
    title = _INVALID_TITLE_RE.sub("-", str(name)).strip()[:MAX_TITLE_LENGTH]
    return title or "Sheet"


class ExcelWriter:
    """Workbook builder: add tabs, write header + rows + TOTAL, serialise."""

    def __init__(self) -> None:
        self.wb = Workbook()
        # openpyxl starts with one empty tab; the first add_sheet takes it over
        self._default_unused = True

    def add_sheet(self, title: str) -> Worksheet:
        """New tab with a sanitised title. openpyxl suffixes a number on collision."""
        title = safe_sheet_title(title)
        if self._default_unused:
            self._default_unused = False
            ws = self.wb.active
            ws.title = title
            return ws
        return self.wb.create_sheet(title=title)

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: list[ColSpec],
        data: list[dict],
        freeze: bool = True,
        show_total: bool = False,
        total_label: str = "TOTAL",
        total_label_col: int = 1,
        blank_rows_before_total: int = 0,
    ) -> int:
        """Header at `start_row`, one row per record, then an optional total row.

        The total row sums every "amount" column and puts `total_label` in
        column `total_label_col`. Returns the first row after the table.
        """
        self._write_header(ws, start_row, columns)

        row = start_row + 1
        for record in data:
            for col_num, (key, col_type, _) in enumerate(columns, 1):
                format_data_cell(ws, row, col_num, record.get(key, ""), col_type)
            row += 1

        if show_total:
            row += blank_rows_before_total
            self._write_total(ws, row, columns, data, total_label, total_label_col)
            row += 1

        auto_column_width(ws)
        if freeze:
            ws.freeze_panes = ws.cell(row=start_row + 1, column=1).coordinate
        return row

    @staticmethod
    def _write_header(ws: Worksheet, row: int, columns: list[ColSpec]) -> None:
        for col_num, (_, _, label) in enumerate(columns, 1):
            ws.cell(row=row, column=col_num, value=label)
        format_header_row(ws, row, len(columns))

    @staticmethod
    def _write_total(
        ws: Worksheet,
        row: int,
        columns: list[ColSpec],
        data: list[dict],
        label: str,
        label_col: int,
    ) -> None:
        for col_num, (key, col_type, _) in enumerate(columns, 1):
            if col_type == "amount":
                value, kind = sum(record.get(key) or 0 for record in data), "amount"
            else:
                value, kind = (label if col_num == label_col else ""), "text"
            format_data_cell(ws, row, col_num, value, kind, is_total=True)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.wb.save(buffer)
        return buffer.getvalue()

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path
