"""
Payments export — stored sheets → xlsx workbook (all sheets) and CSV (one sheet).

Exports always use stored row order, never the filtered/sorted view, and
never touch the store.
"""
from __future__ import annotations

import datetime as dt
from pathlib import Path

import pandas as pd

from workshop_payments.common import amount_cell
from workshop_payments.config import CSV_FILENAME, EXPORT_HEADER, TOTAL_LABEL, WORKBOOK_FILENAME
from workshop_payments.data.schemas import Row
from workshop_payments.data.store import RowStore
from workshop_payments.errors import RowReferenceError
from workshop_payments.excel.writer import ColSpec, ExcelWriter

COLUMNS: list[ColSpec] = [
    ("who", "text", EXPORT_HEADER[0]),
    ("why", "text", EXPORT_HEADER[1]),
    ("amount", "amount", EXPORT_HEADER[2]),
]


# ---------------------------------------------------------------------------
# Filenames
# ---------------------------------------------------------------------------

def workbook_filename(day: dt.date | None = None) -> str:
    """workshop_payments_<YYYY-MM-DD>.xlsx"""
    day = day or dt.date.today()
    return WORKBOOK_FILENAME.format(date=day.isoformat())


def csv_filename(sheet: str) -> str:
    return CSV_FILENAME.format(sheet=sheet)


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

def _records(rows: list[Row]) -> list[dict]:
    return [{"who": r.who, "why": r.why, "amount": amount_cell(r.amount)} for r in rows]


def sheet_table(rows: list[Row]) -> list[list]:
    """[header, *rows] for one sheet, in stored order."""
    return [list(EXPORT_HEADER)] + [[r.who, r.why, amount_cell(r.amount)] for r in rows]


def store_tables(store: RowStore) -> dict[str, list[list]]:
    """Every sheet as header + rows + blank separator + TOTAL row."""
    tables = {}
    for name in store.sheet_names():
        table = sheet_table(store.rows(name))
        table.append([])
        table.append(["", TOTAL_LABEL, amount_cell(store.total(name))])
        tables[name] = table
    return tables


# ---------------------------------------------------------------------------
# CSV
# ---------------------------------------------------------------------------

def generate_csv(store: RowStore, sheet: str) -> str:
    """Comma-separated text of exactly one sheet (no total row)."""
    if not store.has_sheet(sheet):
        raise RowReferenceError(f"Sheet not found: {sheet!r}")
    header, *body = sheet_table(store.rows(sheet))
    df = pd.DataFrame(body, columns=header, dtype=object)
    return df.to_csv(index=False, lineterminator="\n")


def write_csv(store: RowStore, sheet: str, folder: Path) -> Path:
    """Write `<sheet>.csv` into `folder`."""
    path = Path(folder) / csv_filename(sheet)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_csv(store, sheet), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Excel
# ---------------------------------------------------------------------------

def build_workbook(store: RowStore) -> ExcelWriter:
    """One tab per sheet in store order, each closed by a blank row and TOTAL."""
    writer = ExcelWriter()
    for name in store.sheet_names():
        ws = writer.add_sheet(name)
        writer.write_table(
            ws,
            start_row=1,
            columns=COLUMNS,
            data=_records(store.rows(name)),
            show_total=True,
            total_label=TOTAL_LABEL,
            total_label_col=2,
            blank_rows_before_total=1,
        )
    return writer


def generate_excel_bytes(store: RowStore) -> bytes:
    return build_workbook(store).to_bytes()


def generate_excel(store: RowStore, output_path: Path) -> Path:
    """Write the whole-store workbook to `output_path`."""
    return build_workbook(store).save(output_path)
