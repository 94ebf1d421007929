"""
Amount helpers shared by the exports and the CLI.
"""
from __future__ import annotations

import math


def amount_cell(value: float) -> int | float:
    """Amount as written to an export cell: 1200.0 → 1200, 12.5 stays 12.5."""
    number = float(value)
    if not math.isfinite(number):
        return 0
    return int(number) if number.is_integer() else number


def format_amount(value: float) -> str:
    """Human display: thousands separators, at most three decimals (1,200 / 12.5)."""
    number = float(value)
    if not math.isfinite(number):
        number = 0.0
    text = f"{number:,.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text

