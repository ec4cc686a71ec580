"""
Happy Thoughts API — Health Check Route
=========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings MongoDB through the injected ThoughtStore and reports uptime.
Who:   Called by container health checks and monitoring systems.

Status levels:
    - healthy:   MongoDB answered the ping
    - unhealthy: MongoDB unreachable (requests touching thoughts will 500)
"""

import logging
import time

from fastapi import APIRouter, Depends
from pymongo.errors import PyMongoError

from happy_thoughts import __version__
from happy_thoughts.database import ThoughtStore, get_thought_store
from happy_thoughts.schemas.thought import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: ThoughtStore = Depends(get_thought_store)) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await store.ping()
    except PyMongoError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
