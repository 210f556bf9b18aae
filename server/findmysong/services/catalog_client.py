"""Spotify catalog search: raw pass-through and best-track matching."""

import logging
import re
from typing import Any

import httpx

from findmysong.exceptions import UpstreamError
from findmysong.models.music import TrackMatch
from findmysong.services.token_cache import TokenCache

logger = logging.getLogger(__name__)

# Brackets hurt Spotify's free-text relevance ("Song (Remastered)")
_BRACKETS = re.compile(r"[()\[\]{}]")


def _normalize_track(item: dict[str, Any]) -> TrackMatch:
    """Map a raw Spotify track item onto a TrackMatch."""
    artists = tuple(a.get("name", "") for a in item.get("artists") or [] if isinstance(a, dict))
    images = (item.get("album") or {}).get("images") or []
    return TrackMatch(
        name=item.get("name") or "",
        artists=artists,
        external_url=(item.get("external_urls") or {}).get("spotify"),
        preview_url=item.get("preview_url"),
        image_url=images[0].get("url") if images else None,
    )


def _matches(track: TrackMatch, hint: str) -> bool:
    needle = hint.lower()
    if needle in track.name.lower():
        return True
    return any(needle in artist.lower() for artist in track.artists)


def build_track_query(title_hint: str, artist_hint: str) -> str:
    query = f"{title_hint} {artist_hint}".strip()
    return " ".join(_BRACKETS.sub("", query).split())


class CatalogClient:
    """Searches the music catalog with a shared client-credentials token."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        token_cache: TokenCache,
        api_url: str,
        timeout: float = 8.0,
        match_limit: int = 5,
    ) -> None:
        self._http = http
        self._tokens = token_cache
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._match_limit = match_limit

    async def search_tracks(self, query: str, limit: int = 20) -> list[dict[str, Any]]:
        """Return the raw ``tracks.items`` list for a free-text query."""
        token = await self._tokens.get_token()
        try:
            response = await self._http.get(
                f"{self._api_url}/search",
                params={"q": query, "type": "track", "limit": limit},
                headers={"Authorization": f"Bearer {token}"},
                timeout=self._timeout,
            )
            response.raise_for_status()
            items = response.json()["tracks"]["items"]
        except httpx.HTTPError as e:
            raise UpstreamError(f"Spotify search failed: {e}") from e
        except (ValueError, KeyError, TypeError) as e:
            raise UpstreamError("Spotify search returned a malformed body") from e

        if not isinstance(items, list):
            raise UpstreamError("Spotify search returned a malformed body")
        return [item for item in items if isinstance(item, dict)]

    async def find_best_track(self, title_hint: str, artist_hint: str, match_hint: str) -> TrackMatch | None:
        """Pick the track best matching a lyric hit.

        The first result whose name or any artist contains ``match_hint``
        (case-insensitive) wins; otherwise the first raw result. Returns
        None when the search yields nothing.
        """
        query = build_track_query(title_hint, artist_hint)
        items = await self.search_tracks(query, limit=self._match_limit)
        if not items:
            logger.debug("No Spotify tracks for '%s'", query)
            return None

        tracks = [_normalize_track(item) for item in items]
        for track in tracks:
            if _matches(track, match_hint):
                return track
        return tracks[0]
