import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from findmysong.api.deps import get_catalog, get_pipeline
from findmysong.config import settings
from findmysong.exceptions import FindMySongError, ValidationError
from findmysong.models.music import AggregatedResult
from findmysong.services.aggregation import AggregationPipeline
from findmysong.services.catalog_client import CatalogClient

router = APIRouter()
logger = logging.getLogger(__name__)


def require_query(q: str = "") -> str:
    """Reject a missing or blank ``q`` before any upstream client is resolved."""
    query = q.strip()
    if not query:
        raise HTTPException(status_code=400, detail="Query parameter q is required")
    return query


@router.get("/spotify/search")
async def search_tracks(
    query: str = Depends(require_query),
    catalog: CatalogClient = Depends(get_catalog),
) -> list[dict[str, Any]]:
    """Raw Spotify track search."""
    try:
        return await catalog.search_tracks(query, limit=settings.catalog_search_limit)
    except FindMySongError as e:
        logger.error("Spotify search failed for '%s': %s", query, e)
        raise HTTPException(status_code=500, detail="Spotify search failed") from e


@router.get("/search-lyrics", response_model=list[AggregatedResult])
async def search_lyrics(
    query: str = Depends(require_query),
    pipeline: AggregationPipeline = Depends(get_pipeline),
) -> list[AggregatedResult]:
    """Find songs by title, artist or lyric snippet, enriched with Spotify links."""
    try:
        return await pipeline.search_by_lyrics(query)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
