"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the configured backend is unusable:
      missing credentials, or an unreachable database for the SQL backend
    - Readiness never calls Airtable or Blobs (no third-party quota spent on probes)
"""

import logging

import httpx
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

import query_store.infrastructure.database as db_module
from query_store.config import Settings, get_settings
from query_store.core.errors import ConfigurationError
from query_store.infrastructure.provider_factory import build_provider

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "latest-query-store",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(settings: Settings = Depends(get_settings)):
    """Readiness probe: backend configured (and database reachable for sql)."""
    async with httpx.AsyncClient() as http:
        try:
            build_provider(settings, http, db_module.db_manager)
        except ConfigurationError as e:
            logger.warning(f"Readiness failed: {e.message}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "not_ready", "reason": e.message},
            )
    if settings.storage_backend == "sql":
        if not await db_module.db_manager.health_check():
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "not_ready", "reason": "database_unavailable"},
            )
    return {"status": "ready", "backend": settings.storage_backend}
