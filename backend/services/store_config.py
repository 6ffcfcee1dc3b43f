import os
import threading

from dotenv import load_dotenv
from sqlalchemy.orm import Session

from models.bk_schema import SPREADSHEET_ID_PROPERTY
from models.script_properties import ScriptProperty
from models.workbook import Workbook
from services.sheet_store import SpreadsheetNotConfigured, open_workbook

load_dotenv()

_cache_lock = threading.Lock()
_cached_id: str | None = None


def get_property(db: Session, key: str) -> str | None:
    prop = db.get(ScriptProperty, key)
    return prop.value if prop is not None else None


def set_property(db: Session, key: str, value: str) -> None:
    prop = db.get(ScriptProperty, key)
    if prop is None:
        db.add(ScriptProperty(key=key, value=value))
    else:
        prop.value = value
    db.flush()


def configured_spreadsheet_id(db: Session) -> str | None:
    """
    Workbook id, resolved once per process: SPREADSHEET_ID from the
    environment, else the persisted script property.
    """
    global _cached_id
    with _cache_lock:
        if _cached_id:
            return _cached_id

    resolved = (os.getenv("SPREADSHEET_ID") or "").strip() or get_property(db, SPREADSHEET_ID_PROPERTY)

    with _cache_lock:
        if resolved:
            _cached_id = resolved
        return _cached_id


def remember_spreadsheet_id(db: Session, workbook_id: str) -> None:
    global _cached_id
    set_property(db, SPREADSHEET_ID_PROPERTY, workbook_id)
    with _cache_lock:
        _cached_id = workbook_id


def reset_spreadsheet_id_cache() -> None:
    global _cached_id
    with _cache_lock:
        _cached_id = None


def open_configured_workbook(db: Session) -> Workbook:
    workbook_id = configured_spreadsheet_id(db)
    if not workbook_id:
        raise SpreadsheetNotConfigured("Spreadsheet is not configured")
    return open_workbook(db, workbook_id)
