"""
Health Check Routes - System health and monitoring endpoints.

These endpoints are used for:
1. Load balancer health checks
2. Container liveness probes
3. Quick cache status verification
"""
from datetime import datetime

from fastapi import APIRouter, Depends

from civic_chat.api.dependencies import get_cache
from civic_chat.cache import TTLCache
from civic_chat.core.logging_config import get_logger
from civic_chat.models.chat import CacheInfo, HealthResponse

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/health",
    tags=["Health"],
)


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description="Returns 200 OK with the response cache size and TTL."
)
async def health_check(cache: TTLCache = Depends(get_cache)) -> HealthResponse:
    """
    Perform a basic health check.

    Does not check LLM or survey store connectivity.
    """
    logger.debug("Health check requested")

    return HealthResponse(
        status="ok",
        timestamp=datetime.utcnow(),
        cache=CacheInfo(size=cache.size(), max_age=cache.max_age_seconds),
    )
