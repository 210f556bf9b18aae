"""Lyrics-to-catalog aggregation behind ``/api/search-lyrics``.

Genius hits are looked up one by one in the Spotify catalog and merged
into AggregatedResult records. Upstream failures never escape: a failed
lyrics search degrades to no results and a failed catalog lookup
degrades to a result without track data.
"""

import asyncio
import logging

from findmysong.exceptions import ValidationError
from findmysong.models.music import AggregatedResult, LyricHit, TrackLookup
from findmysong.services.catalog_client import CatalogClient
from findmysong.services.lyrics_client import LyricsClient

logger = logging.getLogger(__name__)


def merge(hit: LyricHit, lookup: TrackLookup) -> AggregatedResult:
    if not lookup.found:
        return AggregatedResult(
            title=hit.title,
            artist=hit.artist,
            lyrics_url=hit.source_url,
            image_url=hit.image_url,
        )
    track = lookup.track
    return AggregatedResult(
        title=hit.title,
        artist=hit.artist,
        lyrics_url=hit.source_url,
        track_url=track.external_url,
        preview_url=track.preview_url,
        image_url=track.image_url or hit.image_url,
    )


def dedupe_by_title(results: list[AggregatedResult]) -> list[AggregatedResult]:
    """Drop results whose title was already seen; the first occurrence wins."""
    seen: set[str] = set()
    unique: list[AggregatedResult] = []
    for result in results:
        if result.title in seen:
            continue
        seen.add(result.title)
        unique.append(result)
    return unique


class AggregationPipeline:
    """Combines lyrics search hits with best-effort catalog matches."""

    def __init__(self, lyrics: LyricsClient, catalog: CatalogClient, concurrency: int = 5) -> None:
        self._lyrics = lyrics
        self._catalog = catalog
        self._concurrency = max(1, concurrency)

    async def search_by_lyrics(self, query: str) -> list[AggregatedResult]:
        query = (query or "").strip()
        if not query:
            raise ValidationError("Query parameter q is required")

        try:
            hits = await self._lyrics.search_lyrics(query)
        except Exception:
            logger.exception("Lyrics search failed for '%s'", query)
            return []

        semaphore = asyncio.Semaphore(self._concurrency)

        async def bounded(hit: LyricHit) -> TrackLookup:
            async with semaphore:
                return await self._lookup_track(hit, query)

        # gather keeps the input order regardless of completion order
        lookups = await asyncio.gather(*(bounded(hit) for hit in hits))
        failed = sum(1 for lookup in lookups if lookup.error)
        if failed:
            logger.info("%d of %d Spotify lookups failed for '%s'", failed, len(lookups), query)
        results = [merge(hit, lookup) for hit, lookup in zip(hits, lookups)]
        return dedupe_by_title(results)

    async def _lookup_track(self, hit: LyricHit, query: str) -> TrackLookup:
        try:
            track = await self._catalog.find_best_track(hit.title, hit.artist, query)
        except Exception as e:
            logger.warning("Spotify lookup failed for '%s': %s", hit.title, e)
            return TrackLookup(error=str(e) or type(e).__name__)
        return TrackLookup(track=track)
