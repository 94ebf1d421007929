"""
Colors, fonts, fills, borders and alignments for the payments export.
"""
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------
INK = "212121"
PAPER = "FFFFFF"
HEADER_BG = "37474F"
STRIPE_BG = "F5F5F5"
TOTAL_BG = "E3F2FD"
RULE = "CCCCCC"
TOTAL_RULE = "90A4AE"

FONT_NAME = "Calibri"


def _solid(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _box(color: str, top: str = "thin", bottom: str = "thin") -> Border:
    return Border(
        left=Side(style="thin", color=color),
        right=Side(style="thin", color=color),
        top=Side(style=top, color=color),
        bottom=Side(style=bottom, color=color),
    )


# ---------------------------------------------------------------------------
# Header row (Who / Why / How Much)
# ---------------------------------------------------------------------------
HEADER_FONT = Font(name=FONT_NAME, size=11, bold=True, color=PAPER)
HEADER_FILL = _solid(HEADER_BG)
HEADER_BORDER = _box(HEADER_BG, bottom="medium")

# ---------------------------------------------------------------------------
# Payment rows
# ---------------------------------------------------------------------------
ROW_FONT = Font(name=FONT_NAME, size=10, color=INK)
ROW_BORDER = _box(RULE)
STRIPE_FILL = _solid(STRIPE_BG)

# ---------------------------------------------------------------------------
# TOTAL row
# ---------------------------------------------------------------------------
TOTAL_FONT = Font(name=FONT_NAME, size=10, bold=True, color=INK)
TOTAL_FILL = _solid(TOTAL_BG)
TOTAL_BORDER = _box(TOTAL_RULE, top="medium", bottom="double")

# ---------------------------------------------------------------------------
# Alignment and number format
# ---------------------------------------------------------------------------
HEADER_ALIGN = Alignment(horizontal="center", vertical="center")
TEXT_ALIGN = Alignment(horizontal="left", vertical="center")
AMOUNT_ALIGN = Alignment(horizontal="right", vertical="center")

AMOUNT_FORMAT = "#,##0.00"
