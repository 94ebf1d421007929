"""
Persisted snapshot of the store plus the view fields worth keeping.

One key in a key-value medium: the blob lives at ``<folder>/<key>.json``.
Persistence failures are logged and swallowed; `save` reports them by
returning False.
"""
from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from workshop_payments.config import BASE_FOLDER, SNAPSHOT_KEY
from workshop_payments.data.normalize import coerce_amount, coerce_text
from workshop_payments.data.schemas import Row, SortSpec
from workshop_payments.logging_setup import get_logger

logger = get_logger(__name__)


def _row_from_json(data: object) -> Row:
    if not isinstance(data, dict):
        raise ValueError(f"row must be an object, got {type(data).__name__}")
    return Row(
        who=coerce_text(data.get("who")),
        why=coerce_text(data.get("why")),
        amount=coerce_amount(data.get("amount")),
    )


def _optional_text(value: object) -> Optional[str]:
    return value if isinstance(value, str) and value else None


@dataclass
class Snapshot:
    sheets: dict[str, list[Row]] = field(default_factory=dict)
    active_sheet: Optional[str] = None
    sort: SortSpec = field(default_factory=SortSpec)
    person_filter: Optional[str] = None

    def to_json(self) -> dict:
        return {
            "sheets": {name: [r.to_json() for r in rows] for name, rows in self.sheets.items()},
            "activeSheet": self.active_sheet,
            "sort": self.sort.to_json(),
            "personFilter": self.person_filter,
        }

    @staticmethod
    def from_json(data: object) -> "Snapshot":
        """Decode a snapshot payload. Raises ValueError when the shape is wrong."""
        if not isinstance(data, dict) or not isinstance(data.get("sheets"), dict):
            raise ValueError("snapshot has no 'sheets' mapping")
        sheets: dict[str, list[Row]] = {}
        for name, rows in data["sheets"].items():
            if not isinstance(rows, list):
                raise ValueError(f"sheet {name!r} is not a list of rows")
            sheets[str(name)] = [_row_from_json(r) for r in rows]
        return Snapshot(
            sheets=sheets,
            active_sheet=_optional_text(data.get("activeSheet")),
            sort=SortSpec.from_json(data.get("sort")),
            person_filter=_optional_text(data.get("personFilter")),
        )


class SnapshotStore:
    """Reads and writes the snapshot blob for one key."""

    def __init__(self, folder: Path | str = BASE_FOLDER, key: str = SNAPSHOT_KEY) -> None:
        self.folder = Path(folder)
        self.key = key

    @property
    def path(self) -> Path:
        return self.folder / f"{self.key}.json"

    def exists(self) -> bool:
        return self.path.exists()

    def save(self, snapshot: Snapshot) -> bool:
        """Replace the stored blob. Returns False (and logs) if it could not be written."""
        tmp_path: Optional[Path] = None
        try:
            payload = json.dumps(snapshot.to_json(), allow_nan=False)
            self.folder.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=self.key + "_", suffix=".tmp", dir=str(self.folder))
            tmp_path = Path(tmp_name)
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Snapshot not persisted to %s: %s", self.path, exc)
            return False
        finally:
            if tmp_path is not None and tmp_path.exists():
                try:
                    tmp_path.unlink()
                except OSError:
                    pass
        logger.debug("Snapshot saved to %s", self.path)
        return True

    def load(self) -> Optional[Snapshot]:
        """Stored snapshot, or None when absent or unreadable."""
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return Snapshot.from_json(data)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable snapshot %s: %s", self.path, exc)
            return None

    def clear(self) -> bool:
        """Delete the stored blob. A missing blob counts as cleared."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not delete snapshot %s: %s", self.path, exc)
            return False
        return True
