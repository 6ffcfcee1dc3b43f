import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.bk_schema import DATA_SHEET_NAME, HEADERS, build_row
from models.entries import DataEntry
from models.results import OpResult
from services.sheet_store import (
    StoreError,
    append_row,
    delete_row,
    get_last_row,
    get_sheet,
    insert_sheet,
    position_of,
    set_row,
    write_lock,
)
from services.store_config import open_configured_workbook

logger = logging.getLogger(__name__)

SHEET_NOT_FOUND = "Sheet not found"
INVALID_DELETE = "Invalid row number or sheet not found"
ROW_NOT_FOUND = "Row not found"


def save_data_entry(db: Session, entry: DataEntry) -> OpResult:
    row = build_row(entry.by_entry_key())
    try:
        with write_lock():
            workbook = open_configured_workbook(db)
            sheet = get_sheet(db, workbook, DATA_SHEET_NAME)
            if sheet is None:
                sheet = insert_sheet(db, workbook, DATA_SHEET_NAME)

            if get_last_row(db, sheet) == 0:
                set_row(db, sheet, 1, HEADERS)

            position = append_row(db, sheet, row)
            db.commit()
    except (StoreError, SQLAlchemyError) as exc:
        db.rollback()
        logger.exception("Error saving data")
        return OpResult.fail(f"Error saving data: {exc}")

    logger.info("SAVE: sheet=%s row=%s", DATA_SHEET_NAME, position)
    return OpResult.ok("Data saved successfully")


def update_data_entry(db: Session, row_number: int, entry: DataEntry) -> OpResult:
    """
    Overwrite the row at row_number. There is no range check: a position past
    the current last row extends the sheet.
    """
    row = build_row(entry.by_entry_key())
    try:
        with write_lock():
            workbook = open_configured_workbook(db)
            sheet = get_sheet(db, workbook, DATA_SHEET_NAME)
            if sheet is None:
                return OpResult.fail(SHEET_NOT_FOUND)

            set_row(db, sheet, row_number, row)
            db.commit()
    except (StoreError, SQLAlchemyError) as exc:
        db.rollback()
        logger.exception("Error updating data")
        return OpResult.fail(f"Error updating data: {exc}")

    logger.info("UPDATE: sheet=%s row=%s", DATA_SHEET_NAME, row_number)
    return OpResult.ok("Data updated successfully")


def delete_data_entry(db: Session, row_number: int) -> OpResult:
    try:
        with write_lock():
            workbook = open_configured_workbook(db)
            sheet = get_sheet(db, workbook, DATA_SHEET_NAME)
            if sheet is None or row_number <= 1:
                return OpResult.fail(INVALID_DELETE)

            delete_row(db, sheet, row_number)
            db.commit()
    except (StoreError, SQLAlchemyError) as exc:
        db.rollback()
        logger.exception("Error deleting data")
        return OpResult.fail(f"Error deleting data: {exc}")

    logger.info("DELETE: sheet=%s row=%s", DATA_SHEET_NAME, row_number)
    return OpResult.ok("Data deleted successfully")


def _resolve_row_id(db: Session, row_id: int) -> int | None:
    workbook = open_configured_workbook(db)
    sheet = get_sheet(db, workbook, DATA_SHEET_NAME)
    if sheet is None:
        return None
    return position_of(db, sheet, row_id)


def update_data_entry_by_id(db: Session, row_id: int, entry: DataEntry) -> OpResult:
    with write_lock():
        try:
            position = _resolve_row_id(db, row_id)
        except (StoreError, SQLAlchemyError) as exc:
            db.rollback()
            logger.exception("Error resolving row id %s", row_id)
            return OpResult.fail(f"Error updating data: {exc}")

        if position is None or position <= 1:
            return OpResult.fail(ROW_NOT_FOUND)
        return update_data_entry(db, position, entry)


def delete_data_entry_by_id(db: Session, row_id: int) -> OpResult:
    with write_lock():
        try:
            position = _resolve_row_id(db, row_id)
        except (StoreError, SQLAlchemyError) as exc:
            db.rollback()
            logger.exception("Error resolving row id %s", row_id)
            return OpResult.fail(f"Error deleting data: {exc}")

        if position is None or position <= 1:
            return OpResult.fail(ROW_NOT_FOUND)
        return delete_data_entry(db, position)
