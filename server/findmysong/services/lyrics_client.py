"""Genius search client: finds songs whose title or artist match a lyric query."""

import logging
from typing import Any

import httpx

from findmysong.exceptions import ConfigurationError, UpstreamError
from findmysong.models.music import LyricHit

logger = logging.getLogger(__name__)


def _normalize_hit(hit: dict[str, Any]) -> LyricHit | None:
    """Map a raw Genius search hit onto a LyricHit, or None if it has no song."""
    song = hit.get("result")
    if not isinstance(song, dict):
        return None
    title = song.get("title")
    if not isinstance(title, str) or not title:
        return None

    primary_artist = song.get("primary_artist")
    artist = primary_artist.get("name") if isinstance(primary_artist, dict) else None
    url = song.get("url")
    image_url = song.get("song_art_image_url")
    return LyricHit(
        title=title,
        artist=artist if isinstance(artist, str) else "",
        source_url=url if isinstance(url, str) else "",
        image_url=image_url if isinstance(image_url, str) else None,
    )


class LyricsClient:
    """Searches Genius for songs."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        access_token: str,
        api_url: str,
        timeout: float = 8.0,
        max_hits: int = 25,
        query_suffix: str = "lyrics song",
    ) -> None:
        if not access_token:
            raise ConfigurationError("GENIUS_ACCESS_TOKEN is not set")
        self._http = http
        self._access_token = access_token
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._max_hits = max_hits
        self._query_suffix = query_suffix

    async def search_lyrics(self, query: str) -> list[LyricHit]:
        """Search Genius and keep hits whose title or artist contain ``query``."""
        search = f"{query} {self._query_suffix}".strip()
        try:
            response = await self._http.get(
                f"{self._api_url}/search",
                params={"q": search},
                headers={"Authorization": f"Bearer {self._access_token}"},
                timeout=self._timeout,
            )
            response.raise_for_status()
            raw_hits = response.json()["response"]["hits"]
        except httpx.HTTPError as e:
            raise UpstreamError(f"Genius search failed: {e}") from e
        except (ValueError, KeyError, TypeError) as e:
            raise UpstreamError("Genius search returned a malformed body") from e

        if not isinstance(raw_hits, list):
            raise UpstreamError("Genius search returned a malformed body")

        # Genius ranking is noisy for short queries, so filter on the raw term
        needle = query.lower()
        hits: list[LyricHit] = []
        for raw in raw_hits:
            hit = _normalize_hit(raw) if isinstance(raw, dict) else None
            if hit is None:
                continue
            if needle in hit.title.lower() or needle in hit.artist.lower():
                hits.append(hit)
            if len(hits) >= self._max_hits:
                break

        logger.info("Genius returned %d hits for '%s', %d kept", len(raw_hits), query, len(hits))
        return hits
