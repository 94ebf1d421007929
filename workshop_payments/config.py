"""
Workshop Payments — Configuration: paths, constants, column aliases.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths: override with WORKSHOP_PAYMENTS_DATA_DIR env var
# ---------------------------------------------------------------------------
def data_folder() -> Path:
    """Current data folder; re-reads the env var (the server may set it late)."""
    return Path(os.environ.get("WORKSHOP_PAYMENTS_DATA_DIR", str(Path.home() / ".workshop_payments")))


BASE_FOLDER = data_folder()

# ---------------------------------------------------------------------------
# Persisted snapshot: one key in the key-value medium (a JSON file per key)
# ---------------------------------------------------------------------------
SNAPSHOT_KEY = "workshop_payments_state_v1"

# ---------------------------------------------------------------------------
# Column aliases from raw dataset headers → canonical fields
# Matched after trim + lower-case + whitespace collapse.
# ---------------------------------------------------------------------------
FIELD_ALIASES = {
    "who": ("who", "to", "paid to", "name"),
    "why": ("why", "reason", "description", "for"),
    "amount": ("how much", "amount", "value", "cost"),
}

CANONICAL_FIELDS = ["who", "why", "amount"]

# ---------------------------------------------------------------------------
# Export layout
# ---------------------------------------------------------------------------
EXPORT_HEADER = ["Who", "Why", "How Much"]
TOTAL_LABEL = "TOTAL"
WORKBOOK_FILENAME = "workshop_payments_{date}.xlsx"
CSV_FILENAME = "{sheet}.csv"

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CSV_MEDIA_TYPE = "text/csv; charset=utf-8"

# ---------------------------------------------------------------------------
# Accepted dataset files
# ---------------------------------------------------------------------------
WORKBOOK_EXTENSIONS = (".xlsx", ".xlsm")
CSV_EXTENSIONS = (".csv",)
