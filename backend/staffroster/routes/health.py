"""
StaffRoster Backend: Health Check Route
=========================================

What:  Health check endpoint for monitoring and load balancer probes.
Why:   The service is only useful while its record store is reachable.
How:   Pings the record store with a lightweight query and reports status.
Who:   Called by Docker health checks, load balancers and monitoring systems.

Status levels:
    - healthy:   Record store reachable (HTTP 200)
    - unhealthy: Record store unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Request, Response

from staffroster import __version__
from staffroster.schemas.employee import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Record store unreachable", "model": HealthResponse}},
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    """Probe the record store and return aggregate status with uptime."""
    store = getattr(request.app.state, "record_store", None)
    reachable = store is not None and await store.ping()

    if not reachable:
        logger.warning("Health check: record store unreachable")
        response.status_code = 503

    return HealthResponse(
        status="healthy" if reachable else "unhealthy",
        version=__version__,
        database="connected" if reachable else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
