from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from surveyapp.apps.api.container import Container
from surveyapp.apps.api.dependencies import get_container

router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check(container: Container = Depends(get_container)) -> JSONResponse:
    """Report database and cache health.

    ``degraded`` means the service still answers but without the shared cache.
    """
    cache_health = await container.cache.health_check()
    database_ok = await container.database.ping()

    if not database_ok:
        overall = "unhealthy"
    elif container.cache.distributed is not None and not cache_health.distributed_healthy:
        overall = "degraded"
    else:
        overall = "healthy"

    return JSONResponse(
        status_code=200 if database_ok else 503,
        content={
            "status": overall,
            "checks": {
                "database": {"ok": database_ok},
                "cache": cache_health.as_dict(),
            },
            "cache_stats": container.cache.stats(),
        },
    )


@router.get("/metrics")
async def metrics() -> Response:
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
