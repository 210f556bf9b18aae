"""Tests for the Genius LyricsClient."""

import httpx
import pytest

from findmysong.exceptions import ConfigurationError, UpstreamError
from findmysong.services.lyrics_client import LyricsClient

API_URL = "https://api.genius.test"


def _hit(title: str, artist: str, url: str = "", art: str | None = None) -> dict:
    return {
        "type": "song",
        "result": {
            "title": title,
            "primary_artist": {"name": artist},
            "url": url,
            "song_art_image_url": art,
        },
    }


def _client(handler, max_hits: int = 25) -> LyricsClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return LyricsClient(http, "genius-token", API_URL, max_hits=max_hits)


def _respond(hits, seen: list[httpx.Request] | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(200, json={"meta": {"status": 200}, "response": {"hits": hits}})
    return handler


class TestConfiguration:
    def test_missing_token_raises(self):
        with pytest.raises(ConfigurationError, match="GENIUS_ACCESS_TOKEN"):
            LyricsClient(httpx.AsyncClient(), "", API_URL)


class TestSearchLyrics:
    @pytest.mark.asyncio
    async def test_appends_suffix_and_bearer(self):
        seen: list[httpx.Request] = []
        client = _client(_respond([], seen))
        await client.search_lyrics("love")

        request = seen[0]
        assert request.url.path == "/search"
        assert request.url.params["q"] == "love lyrics song"
        assert request.headers["authorization"] == "Bearer genius-token"

    @pytest.mark.asyncio
    async def test_normalizes_hits(self):
        client = _client(_respond([_hit("Love Story", "Taylor Swift", "g1", "art1")]))
        hits = await client.search_lyrics("love")

        assert len(hits) == 1
        assert hits[0].title == "Love Story"
        assert hits[0].artist == "Taylor Swift"
        assert hits[0].source_url == "g1"
        assert hits[0].image_url == "art1"

    @pytest.mark.asyncio
    async def test_relevance_filter_on_title_or_artist(self):
        hits = [
            _hit("Love Story", "A"),
            _hit("Unrelated", "B"),
            _hit("Song", "Courtney Love"),
        ]
        client = _client(_respond(hits))
        result = await client.search_lyrics("LOVE")
        assert [h.title for h in result] == ["Love Story", "Song"]

    @pytest.mark.asyncio
    async def test_truncates_after_filtering(self):
        hits = [_hit("Nope", "x")] * 3 + [_hit(f"Love {i}", "A") for i in range(10)]
        client = _client(_respond(hits), max_hits=4)
        result = await client.search_lyrics("love")
        assert [h.title for h in result] == ["Love 0", "Love 1", "Love 2", "Love 3"]

    @pytest.mark.asyncio
    async def test_skips_hits_without_song(self):
        hits = [{"type": "article"}, {"result": None}, _hit("Love", "A")]
        client = _client(_respond(hits))
        result = await client.search_lyrics("love")
        assert [h.title for h in result] == ["Love"]

    @pytest.mark.asyncio
    async def test_missing_primary_artist(self):
        hits = [{"result": {"title": "Love", "url": "g"}}]
        client = _client(_respond(hits))
        result = await client.search_lyrics("love")
        assert result[0].artist == ""
        assert result[0].image_url is None

    @pytest.mark.asyncio
    async def test_malformed_hit_does_not_drop_valid_hits(self):
        hits = [
            _hit("Love Story", "A", "g1"),
            {"result": {"title": "Love Me", "primary_artist": "B", "url": 7}},
            {"result": {"title": ["Love"], "primary_artist": {"name": "C"}}},
            {"result": {"title": "Lovely", "primary_artist": {"name": None}, "song_art_image_url": {}}},
            _hit("Endless Love", "D", "g4"),
        ]
        client = _client(_respond(hits))
        result = await client.search_lyrics("love")

        assert [h.title for h in result] == ["Love Story", "Love Me", "Lovely", "Endless Love"]
        assert result[1].artist == ""
        assert result[1].source_url == ""
        assert result[2].image_url is None

    @pytest.mark.asyncio
    async def test_non_2xx_raises_upstream_error(self):
        client = _client(lambda r: httpx.Response(401, json={"error": "invalid_token"}))
        with pytest.raises(UpstreamError):
            await client.search_lyrics("love")

    @pytest.mark.asyncio
    async def test_malformed_body_raises_upstream_error(self):
        client = _client(lambda r: httpx.Response(200, json={"response": {}}))
        with pytest.raises(UpstreamError):
            await client.search_lyrics("love")

    @pytest.mark.asyncio
    async def test_timeout_raises_upstream_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        client = _client(handler)
        with pytest.raises(UpstreamError):
            await client.search_lyrics("love")
