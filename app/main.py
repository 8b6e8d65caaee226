"""
ModelShare FastAPI Application — main entry point.
Public, read-only access to shared diagram models.
"""
import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from .database import DatabaseUnavailableError, connect_db, close_db, get_db
from .routers.share_router import router as share_router
from .config import get_settings
from .middleware.rate_limit import RateLimitMiddleware
from .utils.logging import setup_logging

settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await connect_db()
        db = get_db()
        await db[settings.models_collection].create_index("shareOptions._id", unique=True, sparse=True)
    except Exception as e:
        logger.error("MongoDB not available — share lookups will fail with 503: %s", e)
        await close_db()

    yield

    await close_db()


app = FastAPI(
    title="ModelShare API",
    description="Public share links for diagram models.",
    version="1.0.0",
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
    lifespan=lifespan,
)

app.add_middleware(RateLimitMiddleware)

# Add EXTRA_ALLOWED_ORIGINS env var (comma-separated) for preview/staging URLs.
_dev_origins = [
    "http://localhost:5173",
    "http://localhost:3000",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:3000",
]
_extra = os.getenv("EXTRA_ALLOWED_ORIGINS", "")
_extra_origins = [o.strip() for o in _extra.split(",") if o.strip()]

ALLOWED_ORIGINS = [settings.app_url] + _extra_origins + (
    _dev_origins if settings.environment != "production" else []
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(share_router)


@app.exception_handler(DatabaseUnavailableError)
async def database_unavailable_handler(request: Request, exc: DatabaseUnavailableError):
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": exc.detail})


@app.get("/", tags=["Health"])
async def root():
    return {"service": "ModelShare API", "version": "1.0.0", "status": "running", "docs": "/docs"}


@app.api_route("/health", methods=["GET", "HEAD"], tags=["Health"])
async def health():
    return {
        "status": "ok",
        "database": "connected" if get_db() is not None else "unavailable",
        "environment": settings.environment,
    }
