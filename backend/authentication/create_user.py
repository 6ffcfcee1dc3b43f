import argparse

from db.session import SessionLocal
from db.base import Base
from db.session import engine
from authentication.repository import add_credential
from authentication.schemas import CreateCredentialRequest
from services.sheet_store import write_lock

import models.script_properties  # noqa: F401  (register tables)
import models.workbook  # noqa: F401


def main():
    parser = argparse.ArgumentParser(description="Add a login credential row.")
    parser.add_argument("--username", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--mandal", default="")
    parser.add_argument("--role", default="user", choices=["admin", "user"])
    args = parser.parse_args()

    payload = CreateCredentialRequest(
        username=args.username,
        password=args.password,
        mandal=args.mandal,
        role=args.role,
    )

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        with write_lock():
            created = add_credential(
                db,
                username=payload.username,
                password=payload.password,
                mandal=payload.mandal,
                role=payload.role,
            )
            if created is None:
                raise SystemExit("User already exists")
            db.commit()
        print(f"Created user: {payload.username} ({payload.role}, {payload.mandal or 'no mandal'})")
    finally:
        db.close()


if __name__ == "__main__":
    main()
