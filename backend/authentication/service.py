import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from authentication.repository import find_credential
from authentication.schemas import LoginResult, SessionUser
from services.sheet_store import StoreError

logger = logging.getLogger(__name__)


def login(db: Session, username: str, password: str) -> LoginResult:
    try:
        cred = find_credential(db, username, password)
        # the credential sheet may have just been created
        db.commit()
    except (StoreError, SQLAlchemyError) as exc:
        db.rollback()
        logger.exception("Login error")
        return LoginResult(success=False, message=f"Error during login: {exc}")

    if cred is None:
        return LoginResult(success=False, message="Invalid credentials")

    return LoginResult(
        success=True,
        user=SessionUser(username=username, mandal=str(cred.mandal), role=str(cred.role)),
    )
