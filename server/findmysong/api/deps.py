"""FastAPI dependencies resolving the process-wide services from ``app.state``."""

import logging
from typing import Any

from fastapi import Depends, Header, HTTPException, Request

from findmysong.config import settings
from findmysong.exceptions import ConfigurationError
from findmysong.services.aggregation import AggregationPipeline
from findmysong.services.catalog_client import CatalogClient
from findmysong.services.collection_store import CollectionStore
from findmysong.services.database import Database
from findmysong.services.lyrics_client import LyricsClient
from findmysong.services.security import InvalidTokenError, decode_access_token
from findmysong.services.user_store import UserStore

logger = logging.getLogger(__name__)


def get_catalog(request: Request) -> CatalogClient:
    return request.app.state.catalog


def get_pipeline(request: Request) -> AggregationPipeline:
    """Build the aggregation pipeline on first use and keep it on ``app.state``."""
    state = request.app.state
    pipeline = getattr(state, "pipeline", None)
    if pipeline is None:
        try:
            lyrics = LyricsClient(
                state.http,
                settings.genius_access_token,
                settings.genius_api_url,
                timeout=settings.http_timeout_seconds,
                max_hits=settings.lyrics_max_hits,
                query_suffix=settings.lyrics_query_suffix,
            )
        except ConfigurationError as e:
            logger.error("Lyrics search unavailable: %s", e)
            raise HTTPException(status_code=500, detail="Genius access token is not configured") from e
        pipeline = AggregationPipeline(lyrics, state.catalog, concurrency=settings.catalog_concurrency)
        state.pipeline = pipeline
    return pipeline


def get_database(request: Request) -> Database:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise HTTPException(status_code=503, detail="Database is not configured")
    return db


def get_user_store(db: Database = Depends(get_database)) -> UserStore:
    return UserStore(db)


def get_collection_store(db: Database = Depends(get_database)) -> CollectionStore:
    return CollectionStore(db)


async def get_current_user(
    authorization: str = Header(default=""),
    users: UserStore = Depends(get_user_store),
) -> dict[str, Any]:
    """Resolve the user from an ``Authorization: Bearer <token>`` header."""
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status_code=401, detail="Not authorized")
    try:
        claims = decode_access_token(token.strip())
    except InvalidTokenError as e:
        raise HTTPException(status_code=401, detail="Not authorized") from e

    user = await users.get_by_id(claims["id"])
    if not user:
        raise HTTPException(status_code=401, detail="Not authorized")
    return user
