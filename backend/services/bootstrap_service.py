import logging

from sqlalchemy.orm import Session

from models.bk_schema import (
    CREDENTIAL_HEADERS,
    CREDENTIALS_SHEET_NAME,
    DATA_SHEET_NAME,
    HEADERS,
    SAMPLE_CREDENTIALS,
    SAMPLE_DATA,
    WORKBOOK_NAME,
)
from services.sheet_store import (
    create_workbook,
    get_last_row,
    get_sheet,
    insert_sheet,
    open_workbook,
    set_row,
    set_rows,
    write_lock,
)
from services.store_config import (
    configured_spreadsheet_id,
    remember_spreadsheet_id,
    reset_spreadsheet_id_cache,
)

logger = logging.getLogger(__name__)


def initialize_spreadsheet(db: Session) -> str:
    """
    Ensure the workbook, its data sheet, the credential sheet, headers and
    seed rows exist. Safe to call repeatedly: nothing is seeded twice.

    Unlike the other store operations, faults are logged and re-raised.
    """
    created = False
    try:
        with write_lock():
            existing_id = configured_spreadsheet_id(db)
            if existing_id:
                workbook = open_workbook(db, existing_id)
            else:
                workbook = create_workbook(db, WORKBOOK_NAME)
                remember_spreadsheet_id(db, workbook.id)
                created = True

            main_sheet = get_sheet(db, workbook, DATA_SHEET_NAME)
            if main_sheet is None:
                main_sheet = insert_sheet(db, workbook, DATA_SHEET_NAME)
                set_row(db, main_sheet, 1, HEADERS)
            elif get_last_row(db, main_sheet) == 0:
                set_row(db, main_sheet, 1, HEADERS)

            login_sheet = get_sheet(db, workbook, CREDENTIALS_SHEET_NAME)
            if login_sheet is None:
                login_sheet = insert_sheet(db, workbook, CREDENTIALS_SHEET_NAME)
                set_row(db, login_sheet, 1, CREDENTIAL_HEADERS)
                set_rows(db, login_sheet, 2, SAMPLE_CREDENTIALS)

            if get_last_row(db, main_sheet) <= 1:
                set_rows(db, main_sheet, 2, SAMPLE_DATA)

            db.commit()
            workbook_id = workbook.id
    except Exception:
        db.rollback()
        if created:
            reset_spreadsheet_id_cache()
        logger.exception("Error initializing spreadsheet")
        raise

    logger.info("Spreadsheet initialized successfully. ID: %s", workbook_id)
    return workbook_id
