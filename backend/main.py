import logging
import os

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from db.session import engine, SessionLocal
from db.base import Base

from models import script_properties as _script_properties  # noqa: F401
from models import workbook as _workbook  # noqa: F401
from authentication.router import router as auth_router
from routers.admin import router as admin_router
from routers.data import router as data_router
from services.bootstrap_service import initialize_spreadsheet

# --------------------------------------------------
# LOGGING
# --------------------------------------------------
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# --------------------------------------------------
# APP
# --------------------------------------------------
app = FastAPI(
    title="Bangaru Kutumbam Tracker API",
    version="1.0.0",
    swagger_ui_parameters={
        "persistAuthorization": True,
        "displayRequestDuration": True,
    },
)

# --------------------------------------------------
# DB INIT
# --------------------------------------------------
@app.on_event("startup")
def _init_db():
    try:
        Base.metadata.create_all(bind=engine)
    except Exception:
        logger.exception("DB init failed")
        return

    if os.getenv("AUTO_INITIALIZE", "0") != "1":
        return

    db = SessionLocal()
    try:
        initialize_spreadsheet(db)
    except Exception:
        logger.exception("Spreadsheet bootstrap failed")
    finally:
        db.close()

# --------------------------------------------------
# CORS
# --------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --------------------------------------------------
# CORS PREFLIGHT (EXPLICIT)
# --------------------------------------------------
@app.options("/{path:path}")
def preflight(path: str, request: Request):
    return Response(status_code=204)


# --------------------------------------------------
# ROUTERS
# --------------------------------------------------
app.include_router(auth_router)
app.include_router(data_router)
app.include_router(admin_router)

# --------------------------------------------------
# HEALTH CHECK
# --------------------------------------------------
@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/")
def root():
    return {"status": "ok"}
