"""
Health checks - for load balancers, Kubernetes, and monitoring.
Challenge: Fast liveness; readiness reflects whether Elasticsearch answers.
"""

import logging

from elasticsearch import ApiError, TransportError
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from coursesearch.api.dependencies import SearchClient
from coursesearch.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()


@router.get("")
async def health():
    """Liveness: is the process up?"""
    return {"status": "ok", "app": settings.app_name}


@router.get("/ready")
async def ready(es: SearchClient):
    """Readiness: can Elasticsearch be reached?"""
    try:
        reachable = await es.ping()
    except (ApiError, TransportError) as exc:
        logger.warning("Readiness ping failed: %s", exc)
        reachable = False
    if not reachable:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable"},
        )
    return {"status": "ready"}
