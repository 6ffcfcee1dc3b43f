from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from db.deps import get_db
from authentication.schemas import LoginRequest, LoginResult
from authentication.service import login as login_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResult, response_model_exclude_none=True)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    return login_user(db, payload.username, payload.password)
