"""
Dataset decoding: xlsx / csv files → ordered {sheet name: [raw record]}.

Records keep the file's own column labels; header matching happens later in
workshop_payments.data.normalize.
"""
from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import BinaryIO, Union

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from workshop_payments.config import CSV_EXTENSIONS, WORKBOOK_EXTENSIONS
from workshop_payments.errors import DatasetError
from workshop_payments.logging_setup import get_logger

logger = get_logger(__name__)

RawRecord = dict[str, object]
RawWorkbook = dict[str, list[RawRecord]]

Source = Union[str, Path, bytes, BinaryIO]


def _frame_records(df: pd.DataFrame) -> list[RawRecord]:
    """DataFrame → records with empty cells as "" (matches a blank default)."""
    if df.empty:
        return []
    df = df.astype(object).where(df.notna(), "")
    return df.to_dict("records")


def _suffix(source: Source, filename: str | None) -> str:
    if filename:
        return Path(filename).suffix.lower()
    if isinstance(source, (str, Path)):
        return Path(source).suffix.lower()
    return ""


def _as_buffer(source: Source):
    if isinstance(source, bytes):
        return io.BytesIO(source)
    return source


def read_workbook(source: Source, filename: str | None = None) -> RawWorkbook:
    """Decode a dataset into raw records per sheet, preserving sheet order.

    A CSV file is a single sheet named after the file stem.
    """
    suffix = _suffix(source, filename)
    label = filename or (str(source) if isinstance(source, (str, Path)) else "<buffer>")
    name = Path(label).stem if label != "<buffer>" else "Sheet1"

    try:
        if suffix in CSV_EXTENSIONS:
            df = pd.read_csv(_as_buffer(source), dtype=object, keep_default_na=False)
            workbook = {name: _frame_records(df)}
        elif suffix in WORKBOOK_EXTENSIONS:
            frames = pd.read_excel(_as_buffer(source), sheet_name=None, dtype=object, engine="openpyxl")
            workbook = {str(sheet): _frame_records(df) for sheet, df in frames.items()}
        else:
            raise DatasetError(f"Unsupported file type {suffix or '(none)'!r}; expected .xlsx or .csv")
    except DatasetError:
        raise
    except (OSError, ValueError, KeyError, zipfile.BadZipFile, InvalidFileException) as exc:
        raise DatasetError(f"Could not read dataset {label}: {exc}") from exc

    logger.info("Decoded %d sheet(s) from %s", len(workbook), label)
    return workbook
