import threading
import uuid
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.workbook import Sheet, SheetRow, Workbook


class StoreError(Exception):
    """Base class for tabular store access faults."""


class SpreadsheetNotConfigured(StoreError):
    pass


class SpreadsheetNotFound(StoreError):
    pass


class InvalidPosition(StoreError):
    pass


# Single-writer arbitration point: every read-last-row / write / commit
# sequence against the store runs while holding this lock.
_write_lock = threading.RLock()


def write_lock() -> threading.RLock:
    return _write_lock


def open_workbook(db: Session, workbook_id: str) -> Workbook:
    workbook = db.get(Workbook, workbook_id)
    if workbook is None:
        raise SpreadsheetNotFound(f"Spreadsheet {workbook_id} not found")
    return workbook


def create_workbook(db: Session, name: str) -> Workbook:
    workbook = Workbook(id=uuid.uuid4().hex, name=name)
    db.add(workbook)
    db.flush()
    return workbook


def get_sheet(db: Session, workbook: Workbook, name: str) -> Sheet | None:
    return (
        db.query(Sheet)
        .filter(Sheet.workbook_id == workbook.id)
        .filter(Sheet.name == name)
        .first()
    )


def insert_sheet(db: Session, workbook: Workbook, name: str) -> Sheet:
    sheet = Sheet(workbook_id=workbook.id, name=name)
    db.add(sheet)
    db.flush()
    return sheet


def get_last_row(db: Session, sheet: Sheet) -> int:
    last = (
        db.query(func.max(SheetRow.position))
        .filter(SheetRow.sheet_id == sheet.id)
        .scalar()
    )
    return int(last or 0)


def _pad(cells: list[Any] | None, width: int) -> list[Any]:
    values = list(cells or [])[:width]
    return values + [""] * (width - len(values))


def get_stored_rows(db: Session, sheet: Sheet, start: int, width: int) -> list[tuple[int, int, list[Any]]]:
    """
    (position, row_id, cells) for every stored row at or after start, in
    position order. Positions never written are not returned: they read as
    blank rows, which every reader skips.
    """
    stored = (
        db.query(SheetRow)
        .filter(SheetRow.sheet_id == sheet.id)
        .filter(SheetRow.position >= start)
        .order_by(SheetRow.position, SheetRow.id)
        .all()
    )
    return [(row.position, row.id, _pad(row.cells, width)) for row in stored]


def get_range(db: Session, sheet: Sheet, start: int, count: int, width: int) -> list[list[Any]]:
    """
    Values of positions start..start+count-1, each padded to width.
    Positions never written read back as all-"" rows.
    """
    if count <= 0:
        return []

    end = start + count - 1
    stored = (
        db.query(SheetRow)
        .filter(SheetRow.sheet_id == sheet.id)
        .filter(SheetRow.position >= start, SheetRow.position <= end)
        .all()
    )
    by_position = {row.position: row.cells for row in stored}
    return [_pad(by_position.get(position), width) for position in range(start, end + 1)]


def set_row(db: Session, sheet: Sheet, position: int, values: list[Any]) -> SheetRow:
    if position < 1:
        raise InvalidPosition(f"Row {position} is out of range; rows start at 1")

    row = (
        db.query(SheetRow)
        .filter(SheetRow.sheet_id == sheet.id)
        .filter(SheetRow.position == position)
        .first()
    )
    if row is None:
        row = SheetRow(sheet_id=sheet.id, position=position, cells=list(values))
        db.add(row)
    else:
        row.cells = list(values)
    db.flush()
    return row


def set_rows(db: Session, sheet: Sheet, start: int, rows: list[list[Any]]) -> None:
    for offset, values in enumerate(rows):
        set_row(db, sheet, start + offset, values)


def append_row(db: Session, sheet: Sheet, values: list[Any]) -> int:
    with _write_lock:
        position = get_last_row(db, sheet) + 1
        set_row(db, sheet, position, values)
    return position


def delete_row(db: Session, sheet: Sheet, position: int) -> None:
    """Remove the row at position and shift every later row up by one."""
    with _write_lock:
        (
            db.query(SheetRow)
            .filter(SheetRow.sheet_id == sheet.id)
            .filter(SheetRow.position == position)
            .delete(synchronize_session=False)
        )
        (
            db.query(SheetRow)
            .filter(SheetRow.sheet_id == sheet.id)
            .filter(SheetRow.position > position)
            .update({SheetRow.position: SheetRow.position - 1}, synchronize_session=False)
        )
        db.flush()
        db.expire_all()


def position_of(db: Session, sheet: Sheet, row_id: int) -> int | None:
    position = (
        db.query(SheetRow.position)
        .filter(SheetRow.sheet_id == sheet.id)
        .filter(SheetRow.id == row_id)
        .scalar()
    )
    return int(position) if position is not None else None
