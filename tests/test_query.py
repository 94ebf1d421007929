from workshop_payments.data.query import distinct_people, query_sheet
from workshop_payments.data.schemas import Row, SortKey, SortSpec, ViewState


TRIP = [Row("Alice", "", 1200.0), Row("Bob", "", 300.0)]


def _amounts(view) -> list[float]:
    return [e.row.amount for e in view.entries]


def test_sort_by_amount_then_toggle_descending() -> None:
    state = ViewState(active_sheet="Trip")
    state.sort.toggle(SortKey.AMOUNT)
    assert _amounts(query_sheet(TRIP, state)) == [300.0, 1200.0]

    state.sort.toggle(SortKey.AMOUNT)
    assert state.sort == SortSpec(SortKey.AMOUNT, False)
    assert _amounts(query_sheet(TRIP, state)) == [1200.0, 300.0]


def test_toggle_to_new_key_resets_ascending() -> None:
    sort = SortSpec(SortKey.AMOUNT, False)
    sort.toggle(SortKey.WHO)
    assert sort == SortSpec(SortKey.WHO, True)


def test_person_filter_limits_rows_and_totals() -> None:
    view = query_sheet(TRIP, ViewState(active_sheet="Trip", person_filter="Alice"))
    assert [e.row.who for e in view.entries] == ["Alice"]
    assert view.total == 1200.0
    assert view.person_total == 1200.0
    assert view.people == ["Alice", "Bob"]
    assert view.sheet_total == 1500.0


def test_unknown_person_filter_is_dropped() -> None:
    view = query_sheet(TRIP, ViewState(active_sheet="Trip", person_filter="Zed"))
    assert view.person_filter is None
    assert view.person_total is None
    assert view.total == 1500.0
    assert len(view.entries) == 2


def test_text_sort_ignores_case() -> None:
    rows = [Row("bob", "b", 1), Row("Carol", "a", 2), Row("alice", "C", 3)]
    view = query_sheet(rows, ViewState(sort=SortSpec(SortKey.WHO)))
    assert [e.row.who for e in view.entries] == ["alice", "bob", "Carol"]

    view = query_sheet(rows, ViewState(sort=SortSpec(SortKey.WHY)))
    assert [e.row.why for e in view.entries] == ["a", "b", "C"]


def test_ties_keep_stored_order_both_directions() -> None:
    rows = [Row("a", "x", 5), Row("b", "x", 5), Row("c", "x", 1)]

    view = query_sheet(rows, ViewState(sort=SortSpec(SortKey.AMOUNT, False)))
    assert [e.row.who for e in view.entries] == ["a", "b", "c"]

    view = query_sheet(rows, ViewState(sort=SortSpec(SortKey.AMOUNT, True)))
    assert [e.row.who for e in view.entries] == ["c", "a", "b"]


def test_entries_carry_stored_positions() -> None:
    rows = [Row("Bob", "x", 3), Row("Alice", "y", 1), Row("Bob", "z", 2)]
    view = query_sheet(rows, ViewState(sort=SortSpec(SortKey.AMOUNT), person_filter="Bob"))
    assert view.positions == [2, 0]
    assert view.entries[0].row is rows[2]
    assert view.total == 5.0


def test_unsorted_view_is_stored_order() -> None:
    rows = [Row("b", "x", 3), Row("a", "y", 1)]
    view = query_sheet(rows, ViewState())
    assert view.positions == [0, 1]
    assert view.sort.key is None


def test_query_does_not_mutate_inputs() -> None:
    rows = [Row("b", "x", 3), Row("a", "y", 1)]
    state = ViewState(sort=SortSpec(SortKey.WHO), person_filter="Nobody")
    query_sheet(rows, state)
    assert rows == [Row("b", "x", 3), Row("a", "y", 1)]
    assert state.person_filter == "Nobody"


def test_empty_sheet() -> None:
    view = query_sheet([], ViewState(active_sheet="Empty", sort=SortSpec(SortKey.AMOUNT)))
    assert view.entries == []
    assert view.total == 0
    assert view.people == []
    assert view.row_count == 0


def test_distinct_people_trims_and_dedupes() -> None:
    rows = [Row(" Bob ", "", 1), Row("Alice", "", 1), Row("Bob", "", 1), Row("", "x", 1)]
    assert distinct_people(rows) == ["Alice", "Bob"]


def test_distinct_people_ignores_case_when_ordering() -> None:
    rows = [Row("bob", "", 1), Row("Carol", "", 1), Row("alice", "", 1), Row("Alice", "", 1)]
    assert distinct_people(rows) == ["Alice", "alice", "bob", "Carol"]
