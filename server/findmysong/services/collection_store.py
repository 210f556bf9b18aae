"""Per-user likes, library and playlists. Every operation is one statement."""

from typing import Any, Literal

from findmysong.models.collection import SavedTrack
from findmysong.services.database import Database, affected_rows

SavedKind = Literal["likes", "library"]

_TRACK_COLUMNS = "track_id, title, artist, track_url, preview_url, image_url, lyrics_url, created_at"


def _track_params(track: SavedTrack) -> tuple[Any, ...]:
    return (
        track.track_id, track.title, track.artist,
        track.track_url, track.preview_url, track.image_url, track.lyrics_url,
    )


class CollectionStore:
    def __init__(self, db: Database) -> None:
        self._db = db

    # ── Likes / library ─────────────────────────────────────────

    async def list_saved(self, kind: SavedKind, user_id: int) -> list[dict[str, Any]]:
        return await self._db.fetch(
            f"SELECT {_TRACK_COLUMNS} FROM {kind} WHERE user_id = $1 ORDER BY created_at DESC",
            user_id,
        )

    async def add_saved(self, kind: SavedKind, user_id: int, track: SavedTrack) -> None:
        await self._db.execute(
            f"INSERT INTO {kind} (user_id, track_id, title, artist, track_url, preview_url, image_url, lyrics_url) "
            "VALUES ($1, $2, $3, $4, $5, $6, $7, $8) ON CONFLICT (user_id, track_id) DO NOTHING",
            user_id, *_track_params(track),
        )

    async def remove_saved(self, kind: SavedKind, user_id: int, track_id: str) -> bool:
        status = await self._db.execute(
            f"DELETE FROM {kind} WHERE user_id = $1 AND track_id = $2",
            user_id, track_id,
        )
        return affected_rows(status) > 0

    # ── Playlists ───────────────────────────────────────────────

    async def list_playlists(self, user_id: int) -> list[dict[str, Any]]:
        return await self._db.fetch(
            "SELECT id, name, created_at FROM playlists WHERE user_id = $1 ORDER BY created_at DESC",
            user_id,
        )

    async def create_playlist(self, user_id: int, name: str) -> dict[str, Any] | None:
        return await self._db.fetchrow(
            "INSERT INTO playlists (user_id, name) VALUES ($1, $2) RETURNING id, name, created_at",
            user_id, name,
        )

    async def get_playlist(self, user_id: int, playlist_id: int) -> dict[str, Any] | None:
        return await self._db.fetchrow(
            "SELECT id, name, created_at FROM playlists WHERE id = $1 AND user_id = $2",
            playlist_id, user_id,
        )

    async def delete_playlist(self, user_id: int, playlist_id: int) -> bool:
        status = await self._db.execute(
            "DELETE FROM playlists WHERE id = $1 AND user_id = $2",
            playlist_id, user_id,
        )
        return affected_rows(status) > 0

    async def list_playlist_tracks(self, user_id: int, playlist_id: int) -> list[dict[str, Any]]:
        return await self._db.fetch(
            f"SELECT {', '.join('t.' + c for c in _TRACK_COLUMNS.split(', '))} "
            "FROM playlist_tracks t JOIN playlists p ON p.id = t.playlist_id "
            "WHERE p.id = $1 AND p.user_id = $2 ORDER BY t.created_at",
            playlist_id, user_id,
        )

    async def add_playlist_track(self, user_id: int, playlist_id: int, track: SavedTrack) -> bool:
        """Add a track to an owned playlist; False when the playlist is not the user's."""
        row = await self._db.fetchrow(
            "WITH owned AS (SELECT id FROM playlists WHERE id = $1 AND user_id = $2), "
            "ins AS ("
            "INSERT INTO playlist_tracks "
            "(playlist_id, track_id, title, artist, track_url, preview_url, image_url, lyrics_url) "
            "SELECT id, $3, $4, $5, $6, $7, $8, $9 FROM owned "
            "ON CONFLICT (playlist_id, track_id) DO NOTHING) "
            "SELECT id FROM owned",
            playlist_id, user_id, *_track_params(track),
        )
        return row is not None

    async def remove_playlist_track(self, user_id: int, playlist_id: int, track_id: str) -> bool:
        status = await self._db.execute(
            "DELETE FROM playlist_tracks t USING playlists p "
            "WHERE t.playlist_id = p.id AND p.id = $1 AND p.user_id = $2 AND t.track_id = $3",
            playlist_id, user_id, track_id,
        )
        return affected_rows(status) > 0
