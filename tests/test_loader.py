import io

import pytest
from openpyxl import Workbook

from workshop_payments.data.loader import read_workbook
from workshop_payments.data.normalize import normalize_table
from workshop_payments.data.schemas import Row
from workshop_payments.errors import DatasetError


CSV_BYTES = b'Who,Why,How Much\nAlice,Hotel,"1,200"\nBob,,300\n'


def _xlsx_bytes() -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Trip"
    ws.append(["Who", "How Much"])
    ws.append(["Alice", "1,200"])
    ws.append(["Bob", 300])

    ws = wb.create_sheet("Workshop")
    ws.append(["Paid To", "Reason", "Amount", "Notes"])
    ws.append(["Carol", "Wood", 50, "oak"])
    ws.append([None, None, None, None])
    ws.append(["Alice", "Glue", 12.5, None])

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def test_csv_bytes_become_one_sheet_named_after_file() -> None:
    workbook = read_workbook(CSV_BYTES, filename="Trip.csv")
    assert workbook == {
        "Trip": [
            {"Who": "Alice", "Why": "Hotel", "How Much": "1,200"},
            {"Who": "Bob", "Why": "", "How Much": "300"},
        ]
    }


def test_csv_path(tmp_path) -> None:
    path = tmp_path / "Expenses.csv"
    path.write_bytes(CSV_BYTES)
    workbook = read_workbook(path)
    assert list(workbook) == ["Expenses"]
    assert normalize_table(workbook["Expenses"]) == [
        Row("Alice", "Hotel", 1200.0),
        Row("Bob", "", 300.0),
    ]


def test_xlsx_keeps_sheet_order_and_normalizes() -> None:
    workbook = read_workbook(_xlsx_bytes(), filename="payments.xlsx")
    assert list(workbook) == ["Trip", "Workshop"]
    assert normalize_table(workbook["Trip"]) == [
        Row("Alice", "", 1200.0),
        Row("Bob", "", 300.0),
    ]
    assert normalize_table(workbook["Workshop"]) == [
        Row("Carol", "Wood", 50.0),
        Row("Alice", "Glue", 12.5),
    ]


def test_header_only_sheet_is_empty() -> None:
    wb = Workbook()
    wb.active.append(["Who", "Why", "Amount"])
    buffer = io.BytesIO()
    wb.save(buffer)
    workbook = read_workbook(buffer.getvalue(), filename="empty.xlsx")
    assert workbook == {"Sheet": []}


@pytest.mark.parametrize(
    "source, filename",
    [
        (b"hello", "notes.txt"),
        (b"hello", None),
        (b"definitely not a zip", "broken.xlsx"),
        (b"", "empty.csv"),
    ],
)
def test_unreadable_sources_raise_dataset_error(source, filename) -> None:
    with pytest.raises(DatasetError):
        read_workbook(source, filename=filename)


def test_missing_file(tmp_path) -> None:
    with pytest.raises(DatasetError):
        read_workbook(tmp_path / "missing.xlsx")
