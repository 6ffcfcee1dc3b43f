import os

os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from db.base import Base
from db.deps import get_db
from db.session import build_engine_kwargs
from services.bootstrap_service import initialize_spreadsheet
from services.store_config import reset_spreadsheet_id_cache

import models.script_properties  # noqa: F401
import models.workbook  # noqa: F401


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    monkeypatch.delenv("SPREADSHEET_ID", raising=False)
    reset_spreadsheet_id_cache()
    yield
    reset_spreadsheet_id_cache()


@pytest.fixture
def session_factory(tmp_path):
    url = f"sqlite:///{tmp_path / 'test.db'}"
    engine = create_engine(url, **build_engine_kwargs(url))
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded_db(db):
    initialize_spreadsheet(db)
    return db


@pytest.fixture
def client(session_factory):
    from main import app

    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def seeded_client(client, session_factory):
    session = session_factory()
    try:
        initialize_spreadsheet(session)
    finally:
        session.close()
    return client
