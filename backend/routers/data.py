import json

import pandas as pd
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import StreamingResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from db.deps import get_db
from models.bk_schema import HEADERS
from models.entries import DataEntry, FilterSet, QueryRequest
from models.results import FilterOptions, OpResult, PagedResult
from services.entry_service import (
    delete_data_entry,
    delete_data_entry_by_id,
    save_data_entry,
    update_data_entry,
    update_data_entry_by_id,
)
from services.query_service import get_data, get_filter_options

router = APIRouter(prefix="/data", tags=["data"])


def _filters_from_query(*reserved: str):
    """
    Build a FilterSet from every query parameter except the route's own
    (page, pageSize, format). Unknown keys fail validation like the JSON body.
    """

    def dependency(request: Request) -> FilterSet:
        params = {k: v for k, v in request.query_params.items() if k not in reserved}
        try:
            return FilterSet.model_validate(params)
        except ValidationError as exc:
            raise RequestValidationError(
                [{**err, "loc": ("query", *err["loc"])} for err in exc.errors(include_url=False)]
            )

    return dependency


@router.get("/filter-options", response_model=FilterOptions)
def filter_options(db: Session = Depends(get_db)):
    return get_filter_options(db)


@router.get("", response_model=PagedResult, response_model_exclude_none=True)
def list_rows(
    filters: FilterSet = Depends(_filters_from_query("page", "pageSize")),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, alias="pageSize"),
    db: Session = Depends(get_db),
):
    return get_data(db, filters, page=page, page_size=page_size)


@router.post("/query", response_model=PagedResult, response_model_exclude_none=True)
def query_rows(payload: QueryRequest, db: Session = Depends(get_db)):
    return get_data(db, payload.filters, page=payload.page, page_size=payload.page_size)


@router.post("/entries", response_model=OpResult)
def create_entry(payload: DataEntry, db: Session = Depends(get_db)):
    return save_data_entry(db, payload)


@router.put("/entries/by-id/{row_id}", response_model=OpResult)
def update_entry_by_id(row_id: int, payload: DataEntry, db: Session = Depends(get_db)):
    return update_data_entry_by_id(db, row_id, payload)


@router.delete("/entries/by-id/{row_id}", response_model=OpResult)
def delete_entry_by_id(row_id: int, db: Session = Depends(get_db)):
    return delete_data_entry_by_id(db, row_id)


@router.put("/entries/{row_number}", response_model=OpResult)
def update_entry(row_number: int, payload: DataEntry, db: Session = Depends(get_db)):
    return update_data_entry(db, row_number, payload)


@router.delete("/entries/{row_number}", response_model=OpResult)
def delete_entry(row_number: int, db: Session = Depends(get_db)):
    return delete_data_entry(db, row_number)


@router.get("/export")
def export_rows(
    filters: FilterSet = Depends(_filters_from_query("format")),
    format: str = Query("csv"),
    db: Session = Depends(get_db),
):
    fmt = (format or "csv").strip().lower()
    if fmt not in {"csv", "json"}:
        raise HTTPException(status_code=400, detail="format must be csv or json")

    # one page holding every filtered row
    first = get_data(db, filters, page=1, page_size=1)
    result = get_data(db, filters, page=1, page_size=max(first.total_rows, 1))

    if fmt == "json":
        payloads = [dict(zip(HEADERS, row)) for row in result.data]
        content = json.dumps(payloads).encode("utf-8")
        media_type = "application/json"
        filename = "bangaru_kutumbam.json"
    else:
        df = pd.DataFrame(result.data, columns=HEADERS)
        content = df.to_csv(index=False).encode("utf-8")
        media_type = "text/csv"
        filename = "bangaru_kutumbam.csv"

    return StreamingResponse(
        iter([content]),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
