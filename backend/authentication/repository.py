from types import SimpleNamespace

from sqlalchemy.orm import Session

from models.bk_schema import (
    CREDENTIAL_HEADERS,
    CREDENTIAL_WIDTH,
    CREDENTIALS_SHEET_NAME,
    DEFAULT_ROLE,
)
from models.workbook import Sheet
from services.sheet_store import (
    append_row,
    get_last_row,
    get_sheet,
    get_stored_rows,
    insert_sheet,
    set_row,
    write_lock,
)
from services.store_config import open_configured_workbook


def _credentials_sheet(db: Session) -> Sheet:
    workbook = open_configured_workbook(db)
    sheet = get_sheet(db, workbook, CREDENTIALS_SHEET_NAME)
    if sheet is not None:
        return sheet

    with write_lock():
        sheet = get_sheet(db, workbook, CREDENTIALS_SHEET_NAME)
        if sheet is None:
            sheet = insert_sheet(db, workbook, CREDENTIALS_SHEET_NAME)
            db.commit()
    return sheet


def _to_credential(row: list) -> SimpleNamespace:
    return SimpleNamespace(
        username=row[0],
        password=row[1],
        mandal=row[2],
        role=row[3] or DEFAULT_ROLE,
    )


def list_credentials(db: Session) -> list[SimpleNamespace]:
    """Credential rows in sheet order, header excluded."""
    sheet = _credentials_sheet(db)
    rows = get_stored_rows(db, sheet, 2, CREDENTIAL_WIDTH)
    return [_to_credential(cells) for _, _, cells in rows]


def find_credential(db: Session, username: str, password: str) -> SimpleNamespace | None:
    # first match wins on duplicate usernames
    for cred in list_credentials(db):
        if cred.username == username and cred.password == password:
            return cred
    return None


def get_credential_by_username(db: Session, username: str) -> SimpleNamespace | None:
    for cred in list_credentials(db):
        if cred.username == username:
            return cred
    return None


def add_credential(db: Session, username: str, password: str, mandal: str, role: str) -> SimpleNamespace | None:
    if get_credential_by_username(db, username) is not None:
        return None

    sheet = _credentials_sheet(db)
    if get_last_row(db, sheet) == 0:
        set_row(db, sheet, 1, CREDENTIAL_HEADERS)
    append_row(db, sheet, [username, password, mandal, role])
    return SimpleNamespace(username=username, password=password, mandal=mandal, role=role)
