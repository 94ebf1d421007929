"""
Header matching and amount coercion: raw dataset records → canonical rows.
"""
from __future__ import annotations

import math
import numbers
import re
from typing import Iterable, Mapping

import pandas as pd

from workshop_payments.config import FIELD_ALIASES
from workshop_payments.data.schemas import Row


# ---------------------------------------------------------------------------
# Header normalisation
# ---------------------------------------------------------------------------

_WHITESPACE_RE = re.compile(r"\s+")

# alias → canonical field, e.g. "paid to" → "who"
LABEL_MAP = {alias: fieldname for fieldname, aliases in FIELD_ALIASES.items() for alias in aliases}


def normalize_header(label: object) -> str:
    """Trim, lower-case and collapse whitespace so 'Paid  To ' matches 'paid to'."""
    if label is None or label == "":
        return ""
    return _WHITESPACE_RE.sub(" ", str(label).strip().lower())


def match_field(label: object) -> str | None:
    """Canonical field for a raw column label, or None when it is not recognised."""
    return LABEL_MAP.get(normalize_header(label))


# ---------------------------------------------------------------------------
# Value coercion
# ---------------------------------------------------------------------------

_AMOUNT_STRIP_RE = re.compile(r"[, ]+")
_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    return pd.api.types.is_scalar(value) and bool(pd.isna(value))


def coerce_amount(value: object) -> float:
    """Coerce a raw cell to a finite float. Anything unparseable becomes 0."""
    if _is_missing(value) or isinstance(value, bool):
        return 0.0
    if isinstance(value, numbers.Real):
        number = float(value)
        return number if math.isfinite(number) else 0.0

    text = _AMOUNT_STRIP_RE.sub("", str(value)).strip()
    if not _DECIMAL_RE.match(text):
        return 0.0
    number = float(text)
    return number if math.isfinite(number) else 0.0


def coerce_text(value: object) -> str:
    """Trimmed text for who/why cells; 12.0 renders as '12'."""
    if _is_missing(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


# ---------------------------------------------------------------------------
# Records → rows
# ---------------------------------------------------------------------------

def normalize_record(record: Mapping[object, object]) -> Row:
    """Map one raw record onto a Row. The last label matching a field wins."""
    values = {"who": "", "why": "", "amount": 0.0}
    for label, value in record.items():
        fieldname = match_field(label)
        if fieldname == "amount":
            values["amount"] = coerce_amount(value)
        elif fieldname is not None:
            values[fieldname] = coerce_text(value)
    return Row(**values)


def normalize_table(records: Iterable[Mapping[object, object]]) -> list[Row]:
    """Normalise records in order, dropping lines with no who, why or amount."""
    rows = (normalize_record(r) for r in records)
    return [row for row in rows if not row.is_blank()]


def normalize_frame(df: pd.DataFrame) -> list[Row]:
    """Normalise a decoded sheet held as a DataFrame."""
    if df.empty:
        return []
    return normalize_table(df.to_dict("records"))
