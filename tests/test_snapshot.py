import json

import pandas as pd

from workshop_payments.data.normalize import normalize_frame
from workshop_payments.data.schemas import Row, SortKey, SortSpec
from workshop_payments.data.snapshot import Snapshot, SnapshotStore


def _snapshot() -> Snapshot:
    return Snapshot(
        sheets={"Trip": [Row("Alice", "Hotel", 1200.0), Row("Bob", "", 300.0)], "Empty": []},
        active_sheet="Trip",
        sort=SortSpec(SortKey.AMOUNT, False),
        person_filter="Alice",
    )


def test_save_then_load(snapshots: SnapshotStore) -> None:
    assert snapshots.save(_snapshot()) is True
    assert snapshots.exists()

    loaded = snapshots.load()
    assert loaded == _snapshot()
    assert list(loaded.sheets) == ["Trip", "Empty"]


def test_blob_layout(snapshots: SnapshotStore) -> None:
    snapshots.save(_snapshot())
    data = json.loads(snapshots.path.read_text(encoding="utf-8"))
    assert snapshots.path.name == "workshop_payments_state_v1.json"
    assert data["activeSheet"] == "Trip"
    assert data["sort"] == {"key": "amount", "asc": False}
    assert data["personFilter"] == "Alice"
    assert data["sheets"]["Trip"][0] == {"who": "Alice", "why": "Hotel", "amount": 1200.0}


def test_save_replaces_previous_blob(snapshots: SnapshotStore) -> None:
    snapshots.save(_snapshot())
    snapshots.save(Snapshot(sheets={"Other": []}))
    assert list(snapshots.load().sheets) == ["Other"]
    # no temp files left behind
    assert [p.name for p in snapshots.folder.iterdir()] == [snapshots.path.name]


def test_missing_blob_loads_as_none(snapshots: SnapshotStore) -> None:
    assert snapshots.load() is None


def test_corrupt_blob_loads_as_none(snapshots: SnapshotStore) -> None:
    snapshots.folder.mkdir(parents=True)
    snapshots.path.write_text("{not json", encoding="utf-8")
    assert snapshots.load() is None

    snapshots.path.write_text(json.dumps({"sheets": {"Trip": "oops"}}), encoding="utf-8")
    assert snapshots.load() is None

    snapshots.path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    assert snapshots.load() is None


def test_loose_values_are_coerced(snapshots: SnapshotStore) -> None:
    snapshots.folder.mkdir(parents=True)
    snapshots.path.write_text(json.dumps({
        "sheets": {"Trip": [{"who": " Alice ", "amount": "1,200"}]},
        "activeSheet": 5,
        "sort": {"key": "colour", "asc": "yes"},
    }), encoding="utf-8")

    loaded = snapshots.load()
    assert loaded.sheets == {"Trip": [Row("Alice", "", 1200.0)]}
    assert loaded.active_sheet is None
    assert loaded.sort == SortSpec()
    assert loaded.person_filter is None


def test_save_failure_returns_false(tmp_path) -> None:
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")
    store = SnapshotStore(blocker)
    assert store.save(_snapshot()) is False
    assert store.load() is None


def test_clear(snapshots: SnapshotStore) -> None:
    snapshots.save(_snapshot())
    assert snapshots.clear() is True
    assert not snapshots.exists()
    # clearing twice is fine
    assert snapshots.clear() is True


def test_rows_decoded_from_a_frame_save_as_plain_json(snapshots: SnapshotStore) -> None:
    df = pd.DataFrame({"Who": ["Alice", "Bob"], "Why": ["Hotel", "Taxi"], "Amount": [1200, 12.5]})
    rows = normalize_frame(df)
    assert all(type(r.amount) is float for r in rows)

    assert snapshots.save(Snapshot(sheets={"Trip": rows}, active_sheet="Trip")) is True
    assert snapshots.load().sheets == {"Trip": [Row("Alice", "Hotel", 1200.0), Row("Bob", "Taxi", 12.5)]}
