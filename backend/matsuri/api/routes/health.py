"""Health & Readiness Probes — liveness plus database and object-storage readiness.

Invariants:
    - GET /api/v1/health/ always returns 200 if the process is up (liveness)
    - GET /api/v1/health/ready returns 503 unless the database answers AND both
      storage buckets (festival images, sponsor logos) are reachable
    - Every check is reported by name, so a 503 says which collaborator is down

Design Decisions:
    - Storage is part of readiness: creation and pledges upload before they write,
      and the catalog signs every image, so a storage outage breaks every flow
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

import matsuri.infrastructure.database as database
import matsuri.infrastructure.storage_client as storage_module
from matsuri.config import Settings, get_settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {"status": "healthy", "service": "matsuri-api", "version": "1.0.0"}


async def _storage_ready(settings: Settings) -> bool:
    client = storage_module.storage_client
    if not client:
        return False
    for bucket in (settings.festival_image_bucket, settings.sponsor_logo_bucket):
        if not await client.health_check(bucket):
            return False
    return True


@router.get("/ready")
async def readiness_check(settings: Settings = Depends(get_settings)):
    db_manager = database.db_manager
    checks = {
        "database": await db_manager.health_check() if db_manager else False,
        "storage": await _storage_ready(settings),
    }
    report = {name: "healthy" if ok else "unavailable" for name, ok in checks.items()}
    if not all(checks.values()):
        logger.warning(f"Readiness failed: {report}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": report},
        )
    return {"status": "ready", "checks": report}
