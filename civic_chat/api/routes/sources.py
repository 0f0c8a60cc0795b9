"""
Sources and Cache Routes.

- GET  /api/sources     : official sites and open-data APIs
- POST /api/cache/clear : drop every cached chat reply
"""
from datetime import datetime

from fastapi import APIRouter, Depends

from civic_chat.api.dependencies import get_cache
from civic_chat.cache import TTLCache
from civic_chat.core.logging_config import get_logger
from civic_chat.models.chat import CacheClearResponse, SourcesResponse
from civic_chat.realtime import OFFICIAL_SOURCES

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Sources"],
)


@router.get(
    "/sources",
    response_model=SourcesResponse,
    summary="List official information sources"
)
async def list_sources() -> SourcesResponse:
    return SourcesResponse(timestamp=datetime.utcnow(), sources=OFFICIAL_SOURCES)


@router.post(
    "/cache/clear",
    response_model=CacheClearResponse,
    summary="Clear the response cache"
)
async def clear_cache(cache: TTLCache = Depends(get_cache)) -> CacheClearResponse:
    before = cache.clear()
    logger.info(f"Cache cleared via API: {before} entries")

    return CacheClearResponse(
        message="Cache limpo com sucesso",
        before_size=before,
        after_size=cache.size(),
        timestamp=datetime.utcnow(),
    )
