import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from app.api.api import api_router
from app.core.config import settings
from app.core.errors import StorageError
from app.db.database import create_tables
from app.utils import logger as _  # noqa: F401 - Import to configure logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.is_development:
        # Make sure the schema exists; deployed databases use alembic
        create_tables()
        logger.info("Database schema ensured")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    description=settings.PROJECT_DESCRIPTION,
    version=settings.VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Change this to specific origins in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location"],
)


@app.exception_handler(StorageError)
async def handle_storage_error(request: Request, exc: StorageError):
    """Database or object store failure, details stay in the logs."""
    logger.error("Storage error on %s %s: %s", request.method, request.url.path, str(exc))
    return JSONResponse(
        status_code=500,
        content={"detail": "A storage error occurred"},
    )


logger.info("Starting %s version %s", settings.PROJECT_NAME, settings.VERSION)

app.include_router(api_router)


@app.get("/", include_in_schema=False)
def read_root():
    if settings.is_development:
        return RedirectResponse(url="/docs")
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}
