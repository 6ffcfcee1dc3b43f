import logging
import math

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.bk_schema import (
    DATA_SHEET_NAME,
    FILTER_COLUMNS,
    HEADERS,
    OPTION_COLUMNS,
    ROW_WIDTH,
    is_blank_row,
)
from models.entries import FilterSet
from models.results import FilterOptions, PagedResult
from services.sheet_store import (
    StoreError,
    get_last_row,
    get_sheet,
    get_stored_rows,
    insert_sheet,
    set_row,
    write_lock,
)
from services.store_config import open_configured_workbook

logger = logging.getLogger(__name__)


def _matches(row: list, filters: dict[str, str]) -> bool:
    for field, value in filters.items():
        if row[FILTER_COLUMNS[field]] != value:
            return False
    return True


def filter_rows(rows, filters: FilterSet):
    """
    Keep non-blank rows matching every active filter by exact equality.
    rows are (position, row_id, cells) triples.
    """
    active = filters.active()
    return [
        item
        for item in rows
        if not is_blank_row(item[2]) and _matches(item[2], active)
    ]


def paginate(items: list, page: int, page_size: int) -> list:
    start = (page - 1) * page_size
    return items[start : start + page_size]


def get_data(
    db: Session,
    filters: FilterSet | None = None,
    page: int = 1,
    page_size: int = 10,
) -> PagedResult:
    filters = filters or FilterSet()
    try:
        workbook = open_configured_workbook(db)
        sheet = get_sheet(db, workbook, DATA_SHEET_NAME)
        if sheet is None:
            return PagedResult.empty()

        last_row = get_last_row(db, sheet)
        if last_row <= 1:
            return PagedResult.empty()

        all_rows = get_stored_rows(db, sheet, 2, ROW_WIDTH)
    except (StoreError, SQLAlchemyError):
        db.rollback()
        logger.exception("Error getting data")
        return PagedResult.empty()

    filtered = filter_rows(all_rows, filters)
    total_rows = len(filtered)
    window = paginate(filtered, page, page_size)

    return PagedResult(
        data=[cells for _, _, cells in window],
        total_rows=total_rows,
        total_pages=math.ceil(total_rows / page_size),
        current_page=page,
        row_numbers=[position for position, _, _ in window],
        row_ids=[row_id for _, row_id, _ in window],
    )


def _distinct_non_empty(rows: list[list], index: int) -> list:
    seen: set = set()
    out = []
    for row in rows:
        value = row[index]
        if value == "" or value in seen:
            continue
        seen.add(value)
        out.append(value)
    return out


def get_filter_options(db: Session) -> FilterOptions:
    try:
        workbook = open_configured_workbook(db)
        sheet = get_sheet(db, workbook, DATA_SHEET_NAME)
        if sheet is None:
            with write_lock():
                if get_sheet(db, workbook, DATA_SHEET_NAME) is None:
                    sheet = insert_sheet(db, workbook, DATA_SHEET_NAME)
                    set_row(db, sheet, 1, HEADERS)
                    db.commit()
                    logger.info("Created sheet %s with headers", DATA_SHEET_NAME)
            return FilterOptions()

        last_row = get_last_row(db, sheet)
        if last_row <= 1:
            return FilterOptions()

        rows = [cells for _, _, cells in get_stored_rows(db, sheet, 2, ROW_WIDTH)]
    except (StoreError, SQLAlchemyError):
        db.rollback()
        logger.exception("Error getting filter options")
        return FilterOptions()

    return FilterOptions(
        **{field: _distinct_non_empty(rows, index) for field, index in OPTION_COLUMNS.items()}
    )
