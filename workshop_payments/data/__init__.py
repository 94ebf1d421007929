"""Data loading, normalization, in-memory store, query engine, and snapshots."""
from .loader import read_workbook
from .store import RowStore
from .schemas import Row, SortKey, SortSpec, ViewState, EditTarget
from .normalize import normalize_header, coerce_amount, normalize_record, normalize_table, normalize_frame
from .query import SheetView, ViewEntry, query_sheet, distinct_people
from .snapshot import Snapshot, SnapshotStore
