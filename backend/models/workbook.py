# models/workbook.py

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func

from db.base import Base


class Workbook(Base):
    __tablename__ = "workbooks"

    id = Column(String(64), primary_key=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class Sheet(Base):
    __tablename__ = "sheets"

    id = Column(Integer, primary_key=True, index=True)
    workbook_id = Column(String(64), ForeignKey("workbooks.id"), nullable=False, index=True)
    name = Column(String, nullable=False)

    __table_args__ = (
        UniqueConstraint("workbook_id", "name", name="uq_sheet_workbook_name"),
    )


class SheetRow(Base):
    __tablename__ = "sheet_rows"

    id = Column(Integer, primary_key=True, index=True)          # durable row id
    sheet_id = Column(Integer, ForeignKey("sheets.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, index=True)      # 1-based, 1 = header
    cells = Column(JSON, nullable=False)
