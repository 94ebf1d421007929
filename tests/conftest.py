"""Shared fixtures.

Every test gets its own data folder so saved snapshots never leak between
tests (``WORKSHOP_PAYMENTS_DATA_DIR`` is read by the API lifespan).
"""
from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# tests/ is one level under the repo root
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from workshop_payments.data.snapshot import SnapshotStore  # noqa: E402
from workshop_payments.data.store import RowStore  # noqa: E402
from workshop_payments.workspace import Workspace  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    data_dir = tmp_path / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("WORKSHOP_PAYMENTS_DATA_DIR", os.fspath(data_dir))
    return data_dir


@pytest.fixture
def trip_records() -> list[dict]:
    return [
        {"Who": "Alice", "How Much": "1,200"},
        {"to": "Bob", "cost": "300"},
    ]


@pytest.fixture
def raw_workbook(trip_records) -> dict[str, list[dict]]:
    return {
        "Trip": trip_records,
        "Workshop": [
            {"Paid To": "Carol", "Reason": "Wood", "Amount": 50},
            {"Paid To": "Alice", "Reason": "Glue", "Amount": "12.5"},
            {"Paid To": "", "Reason": "", "Amount": ""},
        ],
    }


@pytest.fixture
def store(raw_workbook) -> RowStore:
    return RowStore().load_sheets(raw_workbook)


@pytest.fixture
def snapshots(tmp_path: Path) -> SnapshotStore:
    return SnapshotStore(tmp_path / "state")


@pytest.fixture
def workspace(snapshots, raw_workbook) -> Workspace:
    ws = Workspace(snapshots)
    ws.ingest(raw_workbook)
    return ws
