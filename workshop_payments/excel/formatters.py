"""
Cell styling for the payments export: header row, payment cells, TOTAL row.
"""
from __future__ import annotations

from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from workshop_payments.common import format_amount
from workshop_payments.excel.styles import (
    AMOUNT_ALIGN, AMOUNT_FORMAT,
    HEADER_ALIGN, HEADER_BORDER, HEADER_FILL, HEADER_FONT,
    ROW_BORDER, ROW_FONT, STRIPE_FILL,
    TEXT_ALIGN,
    TOTAL_BORDER, TOTAL_FILL, TOTAL_FONT,
)


def format_header_row(ws: Worksheet, row_num: int, num_cols: int) -> None:
    for col in range(1, num_cols + 1):
        cell = ws.cell(row=row_num, column=col)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = HEADER_ALIGN
        cell.border = HEADER_BORDER


def format_data_cell(
    ws: Worksheet,
    row_num: int,
    col_num: int,
    value,
    col_type: str = "text",
    is_total: bool = False,
) -> None:
    """Write one cell of a payment (or TOTAL) row.

    `col_type` is "amount" for the How Much column, anything else is text.
    Payment rows are striped on even sheet rows; the TOTAL row has its own fill.
    """
    cell = ws.cell(row=row_num, column=col_num)
    cell.value = value

    if col_type == "amount":
        cell.alignment = AMOUNT_ALIGN
        cell.number_format = AMOUNT_FORMAT
    else:
        cell.alignment = TEXT_ALIGN

    if is_total:
        cell.font, cell.border, cell.fill = TOTAL_FONT, TOTAL_BORDER, TOTAL_FILL
        return
    cell.font, cell.border = ROW_FONT, ROW_BORDER
    if row_num % 2 == 0:
        cell.fill = STRIPE_FILL


def _display_width(value) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # AMOUNT_FORMAT always shows two decimals
        return len(format_amount(round(value, 2))) + 3
    return len(str(value))


def auto_column_width(ws: Worksheet, min_width: int = 10, max_width: int = 50) -> None:
    """Fit each column to its widest cell, within [min_width, max_width]."""
    for column in ws.columns:
        widest = max((_display_width(cell.value) for cell in column), default=0)
        ws.column_dimensions[get_column_letter(column[0].column)].width = min(
            max(widest + 2, min_width), max_width
        )
