"""
Animal Catalog Backend — Health Check Route
=============================================

What:  Health check endpoint for monitoring and container probes.
How:   Pings the database through the lifespan-owned Database object.

Status levels:
    - healthy:   database reachable
    - unhealthy: database unreachable or not initialized
"""

import logging
import time

from fastapi import APIRouter, Request

from animal_catalog import __version__
from animal_catalog.config import settings
from animal_catalog.database import get_database
from animal_catalog.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    database = get_database(request)
    connected = database is not None and await database.ping()
    if not connected:
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        environment=settings.environment,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
