from sqlalchemy import Column, DateTime, String, func

from db.base import Base


class ScriptProperty(Base):
    __tablename__ = "script_properties"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
