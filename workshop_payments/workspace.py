"""
Workspace — the single owner of the live store and view state.

Every user action is a method here; the API and CLI are thin callers. Commands
that change what would be restored next session autosave the snapshot.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Mapping, Optional

from workshop_payments.config import data_folder
from workshop_payments.data.query import SheetView, query_sheet
from workshop_payments.data.schemas import EditTarget, Row, SortKey, SortSpec, ViewState
from workshop_payments.data.snapshot import Snapshot, SnapshotStore
from workshop_payments.data.store import RowStore
from workshop_payments.errors import RowReferenceError
from workshop_payments.logging_setup import get_logger
from workshop_payments.reports import payments_export

logger = get_logger(__name__)


def exports_folder() -> Path:
    """Default export target, under the current data folder."""
    return data_folder() / "exports"


class Workspace:
    """Live payments data plus the user's selection, sort, filter and edit."""

    def __init__(self, snapshots: SnapshotStore | None = None, autosave: bool = True) -> None:
        self.store = RowStore()
        self.view = ViewState()
        self.snapshots = snapshots
        self.autosave = autosave

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def ingest_ticket(self) -> RowStore:
        """Token for a pending dataset read; pass it back to `ingest`."""
        return self.store

    def ingest(
        self,
        workbook: Mapping[str, Iterable[Mapping]],
        expected: RowStore | None = None,
    ) -> bool:
        """Replace all data with a decoded dataset and select its first sheet.

        When `expected` is given and the store has been replaced since that
        ticket was taken, the read is stale and nothing changes.
        """
        if expected is not None and expected is not self.store:
            logger.info("Dropping stale dataset read; data changed while it was pending")
            return False

        self.store = RowStore().load_sheets(workbook)
        self.view.person_filter = None
        self.view.editing = None
        names = self.store.sheet_names()
        self._activate(names[0] if names else None, preserve_filter=False)
        self._autosave()
        return True

    def reset(self) -> None:
        """Drop all in-memory data and view state."""
        self.store = RowStore()
        self.view = ViewState()

    @property
    def has_data(self) -> bool:
        return not self.store.is_empty

    # ------------------------------------------------------------------
    # View parameters
    # ------------------------------------------------------------------

    def set_active_sheet(self, name: Optional[str], preserve_filter: bool = False) -> None:
        """Select a sheet (None/"" deselects). Clears filter and edit unless preserved."""
        if name and not self.store.has_sheet(name):
            raise RowReferenceError(f"Sheet not found: {name!r}")
        self._activate(name or None, preserve_filter)
        self._autosave()

    def _activate(self, name: Optional[str], preserve_filter: bool) -> None:
        changed = name != self.view.active_sheet
        self.view.active_sheet = name
        if changed or not preserve_filter:
            self.view.editing = None
        if not preserve_filter:
            self.view.person_filter = None
        self._sync_filter()

    def toggle_sort(self, key: SortKey | str) -> SortSpec:
        """Column-header click: same key flips direction, new key sorts ascending."""
        self.view.sort.toggle(SortKey(key))
        self._autosave()
        return self.view.sort

    def set_sort(self, key: SortKey | str | None, ascending: bool = True) -> SortSpec:
        self.view.sort = SortSpec(SortKey(key) if key else None, ascending)
        self._autosave()
        return self.view.sort

    def set_filter(self, person: Optional[str]) -> Optional[str]:
        """Show only rows paid to `person`; an unknown person clears the filter."""
        self.view.person_filter = person.strip() if person and person.strip() else None
        self._sync_filter()
        self._autosave()
        return self.view.person_filter

    def _sync_filter(self) -> None:
        if self.view.person_filter is None:
            return
        if self.view.person_filter not in self.current_view().people:
            self.view.person_filter = None

    # ------------------------------------------------------------------
    # Derived view
    # ------------------------------------------------------------------

    def current_view(self) -> SheetView:
        """Filtered, sorted rows of the active sheet with totals."""
        return query_sheet(self.store.rows(self.view.active_sheet), self.view)

    # ------------------------------------------------------------------
    # Row commands (positions are indexes into stored order)
    # ------------------------------------------------------------------

    def _active_sheet(self) -> str:
        if not self.store.has_sheet(self.view.active_sheet):
            raise RowReferenceError("No sheet selected")
        return self.view.active_sheet

    def append(self, who: object, why: object, amount: object) -> Row:
        row = self.store.append(self._active_sheet(), who, why, amount)
        self._autosave()
        return row

    def edit_at(self, position: int, who: object, why: object, amount: object) -> Row:
        row = self.store.edit_at(self._active_sheet(), position, who, why, amount)
        self._sync_filter()
        self._autosave()
        return row

    def delete_at(self, position: int) -> Row:
        """Delete a row and shift a pending edit that pointed past it."""
        sheet = self._active_sheet()
        removed = self.store.delete_at(sheet, position)

        editing = self.view.editing
        if editing is not None and editing.sheet == sheet:
            if editing.position == position:
                self.view.editing = None
            elif editing.position > position:
                self.view.editing = replace(editing, position=editing.position - 1)

        self._sync_filter()
        self._autosave()
        return removed

    def begin_edit(self, position: int) -> EditTarget:
        sheet = self._active_sheet()
        self.view.editing = EditTarget(sheet=sheet, position=position, original=self.store.row_at(sheet, position))
        return self.view.editing

    def cancel_edit(self) -> None:
        self.view.editing = None

    def commit_edit(self, who: object, why: object, amount: object) -> Row:
        """Save the pending edit. Fails if its row changed or vanished meanwhile."""
        editing = self.view.editing
        if editing is None:
            raise RowReferenceError("No edit in progress")
        if not self._edit_is_current(editing):
            self.view.editing = None
            raise RowReferenceError("The row being edited has changed; edit discarded")

        row = self.store.edit_at(editing.sheet, editing.position, who, why, amount)
        self.view.editing = None
        self._sync_filter()
        self._autosave()
        return row

    def _edit_is_current(self, editing: EditTarget) -> bool:
        rows = self.store.rows(editing.sheet)
        return 0 <= editing.position < len(rows) and rows[editing.position] == editing.original

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        return Snapshot(
            sheets={name: self.store.rows(name) for name in self.store.sheet_names()},
            active_sheet=self.view.active_sheet,
            sort=SortSpec(self.view.sort.key, self.view.sort.ascending),
            person_filter=self.view.person_filter,
        )

    def save(self) -> bool:
        if self.snapshots is None:
            return False
        return self.snapshots.save(self.snapshot())

    def _autosave(self) -> None:
        if self.autosave:
            self.save()

    def restore(self) -> bool:
        """Load the saved snapshot, keeping its person filter. False when none."""
        if self.snapshots is None:
            return False
        snapshot = self.snapshots.load()
        if snapshot is None:
            return False

        self.store = RowStore().replace(snapshot.sheets)
        self.view = ViewState(sort=snapshot.sort, person_filter=snapshot.person_filter)
        names = self.store.sheet_names()
        active = snapshot.active_sheet if self.store.has_sheet(snapshot.active_sheet) else None
        self._activate(active or (names[0] if names else None), preserve_filter=True)
        logger.info("Restored %d sheet(s) from %s", len(names), self.snapshots.path)
        return True

    def clear_saved(self) -> bool:
        """Forget the saved snapshot and start over empty."""
        cleared = self.snapshots.clear() if self.snapshots is not None else True
        self.reset()
        return cleared

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_workbook(self, folder: Path | None = None, day: dt.date | None = None) -> Path:
        """All sheets → workshop_payments_<date>.xlsx in `folder`."""
        if not self.has_data:
            raise RowReferenceError("Nothing to export")
        folder = Path(folder) if folder is not None else exports_folder()
        return payments_export.generate_excel(self.store, folder / payments_export.workbook_filename(day))

    def export_csv(self, folder: Path | None = None) -> Path:
        """Active sheet → <sheet>.csv in `folder`."""
        sheet = self._active_sheet()
        folder = Path(folder) if folder is not None else exports_folder()
        return payments_export.write_csv(self.store, sheet, folder)
