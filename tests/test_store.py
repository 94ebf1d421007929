import pytest

from workshop_payments.data.schemas import Row
from workshop_payments.data.store import RowStore
from workshop_payments.errors import RowReferenceError, ValidationError


def test_load_sheets_keeps_sheet_order_and_normalizes(store: RowStore) -> None:
    assert store.sheet_names() == ["Trip", "Workshop"]
    assert store.rows("Trip") == [
        Row(who="Alice", why="", amount=1200.0),
        Row(who="Bob", why="", amount=300.0),
    ]
    # blank line in Workshop dropped
    assert store.row_count("Workshop") == 2
    assert store.row_count() == 4


def test_load_sheets_replaces_previous_content(store: RowStore) -> None:
    store.load_sheets({"Other": [{"who": "Dan", "why": "Paint", "amount": 3}]})
    assert store.sheet_names() == ["Other"]
    assert not store.has_sheet("Trip")


def test_append_requires_who_and_why(store: RowStore) -> None:
    before = store.rows("Trip")
    with pytest.raises(ValidationError):
        store.append("Trip", "", "lunch", 10)
    with pytest.raises(ValidationError):
        store.append("Trip", "Alice", "   ", 10)
    assert store.rows("Trip") == before


def test_append_adds_trimmed_row_at_end(store: RowStore) -> None:
    row = store.append("Trip", "  Carol ", " Lunch ", "1,000")
    assert row == Row("Carol", "Lunch", 1000.0)
    assert store.rows("Trip")[-1] == row
    assert store.row_count("Trip") == 3


def test_append_unknown_sheet(store: RowStore) -> None:
    with pytest.raises(RowReferenceError):
        store.append("Nope", "Carol", "Lunch", 1)
    assert store.sheet_names() == ["Trip", "Workshop"]


def test_edit_at_overwrites_in_place(store: RowStore) -> None:
    store.edit_at("Trip", 1, "Bob", "Taxi", "350")
    assert store.rows("Trip") == [Row("Alice", "", 1200.0), Row("Bob", "Taxi", 350.0)]


@pytest.mark.parametrize("position", [-1, 2, 99, True, "0"])
def test_edit_at_rejects_bad_positions(store: RowStore, position) -> None:
    before = store.rows("Trip")
    with pytest.raises(RowReferenceError):
        store.edit_at("Trip", position, "Bob", "Taxi", 1)
    assert store.rows("Trip") == before


def test_edit_at_validation_leaves_row_untouched(store: RowStore) -> None:
    with pytest.raises(ValidationError):
        store.edit_at("Trip", 0, "Alice", "", 1)
    assert store.row_at("Trip", 0) == Row("Alice", "", 1200.0)


def test_delete_at_shifts_later_rows_down() -> None:
    store = RowStore().replace({"S": [Row(str(i), "x", float(i)) for i in range(5)]})
    before = store.rows("S")

    removed = store.delete_at("S", 2)

    after = store.rows("S")
    assert removed == before[2]
    assert len(after) == len(before) - 1
    assert after[:2] == before[:2]
    assert after[2:] == before[3:]


def test_delete_at_bad_reference(store: RowStore) -> None:
    with pytest.raises(RowReferenceError):
        store.delete_at("Trip", 5)
    with pytest.raises(RowReferenceError):
        store.delete_at("Missing", 0)
    assert store.row_count() == 4


def test_total(store: RowStore) -> None:
    assert store.total("Trip") == 1500.0
    assert store.total("Workshop") == 62.5
    assert store.total("Missing") == 0
    assert RowStore().replace({"Empty": []}).total("Empty") == 0


def test_rows_returns_copy(store: RowStore) -> None:
    rows = store.rows("Trip")
    rows.clear()
    assert store.row_count("Trip") == 2
    assert store.rows("Missing") == []


def test_to_frame_has_positions(store: RowStore) -> None:
    frame = store.to_frame("Workshop")
    assert frame.columns.tolist() == ["who", "why", "amount", "position"]
    assert frame["position"].tolist() == [0, 1]
    assert frame["amount"].tolist() == [50.0, 12.5]
    assert store.to_frame("Missing").empty


def test_reset_empties_store(store: RowStore) -> None:
    assert not store.is_empty
    store.reset()
    assert store.is_empty
    assert store.sheet_names() == []
    assert store.row_count() == 0
