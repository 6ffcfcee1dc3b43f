from db.session import SessionLocal
from db.base import Base
from db.session import engine
from services.bootstrap_service import initialize_spreadsheet

import models.script_properties  # noqa: F401  (register tables)
import models.workbook  # noqa: F401


def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        spreadsheet_id = initialize_spreadsheet(db)
        print(f"Spreadsheet initialized. SPREADSHEET_ID={spreadsheet_id}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
