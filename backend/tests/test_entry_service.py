import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from pydantic import ValidationError

from models.bk_schema import DATA_SHEET_NAME, HEADERS, ROW_WIDTH, SAMPLE_DATA, build_row
from models.entries import DataEntry
from services.entry_service import (
    delete_data_entry,
    delete_data_entry_by_id,
    save_data_entry,
    update_data_entry,
    update_data_entry_by_id,
)
from services.bootstrap_service import initialize_spreadsheet
from services.query_service import get_data
from services.sheet_store import create_workbook, get_last_row, get_range, get_sheet, get_stored_rows
from services.store_config import open_configured_workbook, remember_spreadsheet_id

FULL_ENTRY = {
    "noOfDelinkingRequestsRaised": 16,
    "districtName": "District9",
    "mandalName": "Mandal9",
    "secretariatID": "SEC009",
    "secretraiatName": "Secretariat9",
    "employeeID": "EMP009",
    "employeeName": "Asha Rani",
    "clusterID": "CL009",
    "totalBangaruKutumbam": 8,
    "noOfBangaruKutumbamAdopted": 9,
    "noOfMargadarsiMobilized": 10,
    "bksVerifiedByGSWS": 11,
    "margadarsisContactedByGSWS": 12,
    "noOfBksNewNeedsCaptured": 13,
    "noOfMargadarsisAgreedToAddressBkNeeds": 14,
    "noOfBkNeedsClosed": 15,
}


def _data_sheet(db):
    return get_sheet(db, open_configured_workbook(db), DATA_SHEET_NAME)


def _bare_workbook(db):
    workbook = create_workbook(db, "Bare")
    remember_spreadsheet_id(db, workbook.id)
    db.commit()


def test_build_row_uses_declared_order():
    row = build_row(DataEntry.model_validate(FULL_ENTRY).by_entry_key())

    assert row == [
        "District9", "Mandal9", "SEC009", "Secretariat9", "EMP009", "Asha Rani", "CL009",
        8, 9, 10, 11, 12, 13, 14, 15, 16,
    ]


def test_build_row_defaults():
    row = build_row(DataEntry(employee_id="EMP010", total_bangaru_kutumbam=None).by_entry_key())

    assert len(row) == ROW_WIDTH
    assert row[:7] == ["", "", "", "", "EMP010", "", ""]
    assert row[7:] == [0] * 9


def test_unknown_entry_key_is_rejected():
    with pytest.raises(ValidationError):
        DataEntry.model_validate({"employeeID": "EMP1", "salary": 10})


def test_save_appends_at_end(seeded_db):
    result = save_data_entry(seeded_db, DataEntry.model_validate(FULL_ENTRY))

    assert result.success is True
    assert result.message == "Data saved successfully"
    data = get_data(seeded_db)
    assert data.total_rows == 4
    assert data.row_numbers[-1] == 5
    assert data.data[-1] == build_row(FULL_ENTRY)


def test_save_applies_defaults(seeded_db):
    save_data_entry(seeded_db, DataEntry.model_validate({"mandalName": "Mandal5"}))

    row = get_data(seeded_db, page_size=100).data[-1]
    assert row == ["", "Mandal5", "", "", "", "", ""] + [0] * 9


def test_save_creates_missing_sheet_with_header(db):
    _bare_workbook(db)

    assert save_data_entry(db, DataEntry(employee_id="EMP1")).success is True

    sheet = _data_sheet(db)
    assert get_range(db, sheet, 1, 1, ROW_WIDTH) == [HEADERS]
    assert get_last_row(db, sheet) == 2


def test_save_without_configured_store_fails(db):
    result = save_data_entry(db, DataEntry(employee_id="EMP1"))

    assert result.success is False
    assert result.message == "Error saving data: Spreadsheet is not configured"


def test_update_overwrites_row(seeded_db):
    result = update_data_entry(seeded_db, 3, DataEntry(employee_id="EMP222", mandal_name="Mandal2"))

    assert result.success is True
    assert result.message == "Data updated successfully"
    rows = get_data(seeded_db).data
    assert rows[0] == SAMPLE_DATA[0]
    assert rows[1] == ["", "Mandal2", "", "", "EMP222", "", ""] + [0] * 9
    assert rows[2] == SAMPLE_DATA[2]


def test_update_past_end_extends_sheet(seeded_db):
    update_data_entry(seeded_db, 8, DataEntry(employee_id="EMP008"))

    assert get_last_row(seeded_db, _data_sheet(seeded_db)) == 8


def test_update_missing_sheet(db):
    _bare_workbook(db)

    result = update_data_entry(db, 2, DataEntry(employee_id="EMP1"))

    assert result.success is False
    assert result.message == "Sheet not found"


@pytest.mark.parametrize("row_number", [1, 0, -3])
def test_delete_protects_header(seeded_db, row_number):
    result = delete_data_entry(seeded_db, row_number)

    assert result.success is False
    assert result.message == "Invalid row number or sheet not found"
    assert get_data(seeded_db).total_rows == 3


def test_delete_missing_sheet(db):
    _bare_workbook(db)

    result = delete_data_entry(db, 2)
    assert result.message == "Invalid row number or sheet not found"


def test_delete_removes_row_and_shifts(seeded_db):
    result = delete_data_entry(seeded_db, 2)

    assert result.success is True
    assert result.message == "Data deleted successfully"
    data = get_data(seeded_db)
    assert data.data == SAMPLE_DATA[1:]
    assert data.row_numbers == [2, 3]


def test_delete_without_configured_store_fails(db):
    result = delete_data_entry(db, 2)
    assert result.message == "Error deleting data: Spreadsheet is not configured"


def test_row_ids_survive_position_shifts(seeded_db):
    before = get_data(seeded_db)
    first_id, second_id, third_id = before.row_ids

    assert delete_data_entry_by_id(seeded_db, first_id).success is True
    after = get_data(seeded_db)
    assert after.row_ids == [second_id, third_id]
    assert after.row_numbers == [2, 3]

    assert update_data_entry_by_id(seeded_db, third_id, DataEntry(employee_id="EMP333")).success is True
    rows = get_data(seeded_db).data
    assert rows[0] == SAMPLE_DATA[1]
    assert rows[1][4] == "EMP333"


def test_unknown_row_id(seeded_db):
    assert update_data_entry_by_id(seeded_db, 9999, DataEntry()).message == "Row not found"
    assert delete_data_entry_by_id(seeded_db, 9999).message == "Row not found"


@pytest.mark.parametrize("row_number", [0, -5])
def test_update_before_header_fails(seeded_db, row_number):
    result = update_data_entry(seeded_db, row_number, DataEntry(employee_id="EMP404"))

    assert result.success is False
    assert result.message.startswith("Error updating data: Row ")
    sheet = _data_sheet(seeded_db)
    assert [position for position, _, _ in get_stored_rows(seeded_db, sheet, -10, ROW_WIDTH)] == [1, 2, 3, 4]


def test_numeric_text_fields_are_stored_as_text(seeded_db):
    entry = DataEntry.model_validate({"employeeID": 1001, "clusterID": 7})
    assert save_data_entry(seeded_db, entry).success is True

    row = get_data(seeded_db).data[-1]
    assert row[4] == "1001"
    assert row[6] == "7"


def test_concurrent_saves_get_distinct_consecutive_rows(session_factory):
    setup = session_factory()
    try:
        initialize_spreadsheet(setup)
    finally:
        setup.close()

    workers = 8
    barrier = threading.Barrier(workers)

    def save(i):
        session = session_factory()
        try:
            barrier.wait()
            return save_data_entry(session, DataEntry(employee_id=f"EMP5{i:02d}"))
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(save, range(workers)))

    assert all(result.success for result in results)

    check = session_factory()
    try:
        data = get_data(check, page_size=100)
    finally:
        check.close()

    assert data.total_rows == workers + len(SAMPLE_DATA)
    assert data.row_numbers == list(range(2, 2 + workers + len(SAMPLE_DATA)))
    saved_ids = {row[4] for row in data.data[len(SAMPLE_DATA):]}
    assert saved_ids == {f"EMP5{i:02d}" for i in range(workers)}
