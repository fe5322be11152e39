import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from app import __version__
from app.db import ping, run_with_timeout

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


@router.get("/health")
async def health(request: Request):
    """
    Health probe for containers and monitoring.
    Runs `SELECT 1` bounded by the health timeout (2s by default).
    Returns:
      - 200 status=healthy, database=connected
      - 503 status=unhealthy, database=disconnected, error=<cause>
    """
    settings = request.app.state.settings
    body = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "version": __version__,
    }
    try:
        await run_in_threadpool(
            run_with_timeout, ping, settings.health_timeout_seconds, request.app.state.engine
        )
    except Exception as e:
        log.warning("health check failed: %s", e)
        body.update(
            status="unhealthy",
            services={"database": "disconnected", "application": "running"},
            error=str(e) or "Unknown error",
        )
        return JSONResponse(body, status_code=status.HTTP_503_SERVICE_UNAVAILABLE, headers=NO_CACHE_HEADERS)

    body.update(status="healthy", services={"database": "connected", "application": "running"})
    return JSONResponse(body, status_code=status.HTTP_200_OK, headers=NO_CACHE_HEADERS)
