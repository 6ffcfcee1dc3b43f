import pytest

from services.sheet_store import (
    InvalidPosition,
    SpreadsheetNotFound,
    append_row,
    create_workbook,
    delete_row,
    get_last_row,
    get_range,
    get_sheet,
    get_stored_rows,
    insert_sheet,
    open_workbook,
    position_of,
    set_row,
)


@pytest.fixture
def sheet(db):
    workbook = create_workbook(db, "Book")
    sheet = insert_sheet(db, workbook, "Data")
    db.commit()
    return sheet


def test_open_unknown_workbook_raises(db):
    with pytest.raises(SpreadsheetNotFound):
        open_workbook(db, "missing")


def test_get_sheet_is_scoped_to_workbook(db):
    first = create_workbook(db, "First")
    second = create_workbook(db, "Second")
    insert_sheet(db, first, "Data")
    db.commit()

    assert get_sheet(db, first, "Data") is not None
    assert get_sheet(db, second, "Data") is None


def test_empty_sheet_has_no_rows(db, sheet):
    assert get_last_row(db, sheet) == 0
    assert get_range(db, sheet, 1, 0, 3) == []


def test_append_goes_after_last_row(db, sheet):
    set_row(db, sheet, 1, ["h1", "h2"])
    assert append_row(db, sheet, ["a", 1]) == 2
    assert append_row(db, sheet, ["b", 2]) == 3
    assert get_range(db, sheet, 1, 3, 2) == [["h1", "h2"], ["a", 1], ["b", 2]]


def test_sparse_positions_read_back_blank_and_padded(db, sheet):
    set_row(db, sheet, 1, ["h"])
    set_row(db, sheet, 4, ["x", 5])

    assert get_last_row(db, sheet) == 4
    assert get_range(db, sheet, 2, 3, 3) == [["", "", ""], ["", "", ""], ["x", 5, ""]]


def test_set_row_overwrites_in_place(db, sheet):
    row = set_row(db, sheet, 2, ["old"])
    again = set_row(db, sheet, 2, ["new"])
    assert row.id == again.id
    assert get_range(db, sheet, 2, 1, 1) == [["new"]]


def test_delete_row_shifts_later_rows_up(db, sheet):
    for values in (["h"], ["a"], ["b"], ["c"]):
        append_row(db, sheet, values)
    db.commit()
    c_id = get_stored_rows(db, sheet, 4, 1)[0][1]

    delete_row(db, sheet, 2)
    db.commit()

    assert get_last_row(db, sheet) == 3
    assert get_range(db, sheet, 1, 3, 1) == [["h"], ["b"], ["c"]]
    assert position_of(db, sheet, c_id) == 3


def test_position_of_unknown_id(db, sheet):
    assert position_of(db, sheet, 12345) is None


@pytest.mark.parametrize("position", [0, -5])
def test_set_row_rejects_positions_before_header(db, sheet, position):
    with pytest.raises(InvalidPosition):
        set_row(db, sheet, position, ["x"])


def test_stored_rows_skip_unwritten_positions(db, sheet):
    set_row(db, sheet, 1, ["h"])
    set_row(db, sheet, 3, ["a"])
    set_row(db, sheet, 1_000_000, ["z"])

    rows = get_stored_rows(db, sheet, 2, 2)

    assert [(position, cells) for position, _, cells in rows] == [(3, ["a", ""]), (1_000_000, ["z", ""])]
