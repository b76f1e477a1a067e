"""
Blog API Backend - Health Check Route
======================================

What:  GET /health for container probes and load balancers.
How:   Runs SELECT 1 through the engine, bounded by the persistence time
       budget. The database is the only critical dependency.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable or too slow (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Response
from sqlalchemy import text

from blog_api import __version__
from blog_api import database
from blog_api.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


async def _ping_database() -> None:
    async with database.engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await database.bounded(_ping_database(), "health_check")
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
