import os

from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from db.deps import get_db
from services.bootstrap_service import initialize_spreadsheet

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/initialize")
def initialize(
    db: Session = Depends(get_db),
    token: str | None = Header(None, alias="X-Bootstrap-Token"),
):
    bootstrap_token = os.getenv("BOOTSTRAP_TOKEN")
    if not bootstrap_token:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="BOOTSTRAP_TOKEN not set")

    if token != bootstrap_token:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid bootstrap token")

    try:
        spreadsheet_id = initialize_spreadsheet(db)
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error initializing spreadsheet: {exc}",
        )

    return {"spreadsheetId": spreadsheet_id}
