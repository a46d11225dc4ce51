"""Latest Query Store API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map QueryStoreError → {"error": message} responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup only for STORAGE_BACKEND=sql
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from query_store.api.error_handlers import register_error_handlers
from query_store.api.routes import clean_text, health, latest_query
from query_store.config import get_settings
from query_store.infrastructure.database import close_db, init_db
from query_store.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if settings.storage_backend == "sql":
        init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
    logger.info(
        "Latest query store started",
        extra={"backend": settings.storage_backend},
    )
    yield
    await close_db()
    logger.info("Latest query store shutting down")


app = FastAPI(
    title="Latest Query Store", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["content-type", "x-admin-token"],
)

app.include_router(health.router)
app.include_router(latest_query.router, prefix="/api/v1/query")
# Path the original serverless deployment served; existing front-ends still call it
app.include_router(
    latest_query.router, prefix="/.netlify/functions/query", include_in_schema=False,
)
app.include_router(clean_text.router)

register_error_handlers(app)
