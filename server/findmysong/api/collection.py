from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response

from findmysong.api.deps import get_collection_store, get_current_user
from findmysong.models.collection import PlaylistCreate, PlaylistDetail, PlaylistOut, SavedTrack, SavedTrackOut
from findmysong.services.collection_store import CollectionStore, SavedKind

router = APIRouter()


def _saved_routes(kind: SavedKind) -> None:
    """Register list/add/remove routes for a per-user saved-track collection."""

    @router.get(f"/{kind}", response_model=list[SavedTrackOut], name=f"list_{kind}")
    async def list_tracks(
        user: dict[str, Any] = Depends(get_current_user),
        store: CollectionStore = Depends(get_collection_store),
    ) -> list[dict[str, Any]]:
        return await store.list_saved(kind, user["id"])

    @router.post(f"/{kind}", status_code=201, name=f"add_{kind}")
    async def add_track(
        track: SavedTrack,
        user: dict[str, Any] = Depends(get_current_user),
        store: CollectionStore = Depends(get_collection_store),
    ) -> dict[str, str]:
        await store.add_saved(kind, user["id"], track)
        return {"status": "saved", "trackId": track.track_id}

    @router.delete(f"/{kind}/{{track_id}}", status_code=204, name=f"remove_{kind}")
    async def remove_track(
        track_id: str,
        user: dict[str, Any] = Depends(get_current_user),
        store: CollectionStore = Depends(get_collection_store),
    ) -> Response:
        if not await store.remove_saved(kind, user["id"], track_id):
            raise HTTPException(status_code=404, detail="Track not found")
        return Response(status_code=204)


_saved_routes("likes")
_saved_routes("library")


@router.get("/playlists", response_model=list[PlaylistOut])
async def list_playlists(
    user: dict[str, Any] = Depends(get_current_user),
    store: CollectionStore = Depends(get_collection_store),
) -> list[dict[str, Any]]:
    return await store.list_playlists(user["id"])


@router.post("/playlists", status_code=201, response_model=PlaylistOut)
async def create_playlist(
    request: PlaylistCreate,
    user: dict[str, Any] = Depends(get_current_user),
    store: CollectionStore = Depends(get_collection_store),
) -> dict[str, Any]:
    name = request.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Playlist name is required")

    playlist = await store.create_playlist(user["id"], name)
    if not playlist:
        raise HTTPException(status_code=500, detail="Playlist could not be created")
    return playlist


@router.get("/playlists/{playlist_id}", response_model=PlaylistDetail)
async def get_playlist(
    playlist_id: int,
    user: dict[str, Any] = Depends(get_current_user),
    store: CollectionStore = Depends(get_collection_store),
) -> dict[str, Any]:
    playlist = await store.get_playlist(user["id"], playlist_id)
    if not playlist:
        raise HTTPException(status_code=404, detail="Playlist not found")
    tracks = await store.list_playlist_tracks(user["id"], playlist_id)
    return {**playlist, "tracks": tracks}


@router.delete("/playlists/{playlist_id}", status_code=204)
async def delete_playlist(
    playlist_id: int,
    user: dict[str, Any] = Depends(get_current_user),
    store: CollectionStore = Depends(get_collection_store),
) -> Response:
    if not await store.delete_playlist(user["id"], playlist_id):
        raise HTTPException(status_code=404, detail="Playlist not found")
    return Response(status_code=204)


@router.post("/playlists/{playlist_id}/tracks", status_code=201)
async def add_playlist_track(
    playlist_id: int,
    track: SavedTrack,
    user: dict[str, Any] = Depends(get_current_user),
    store: CollectionStore = Depends(get_collection_store),
) -> dict[str, Any]:
    if not await store.add_playlist_track(user["id"], playlist_id, track):
        raise HTTPException(status_code=404, detail="Playlist not found")
    return {"status": "saved", "playlistId": playlist_id, "trackId": track.track_id}


@router.delete("/playlists/{playlist_id}/tracks/{track_id}", status_code=204)
async def remove_playlist_track(
    playlist_id: int,
    track_id: str,
    user: dict[str, Any] = Depends(get_current_user),
    store: CollectionStore = Depends(get_collection_store),
) -> Response:
    if not await store.remove_playlist_track(user["id"], playlist_id, track_id):
        raise HTTPException(status_code=404, detail="Track not found in playlist")
    return Response(status_code=204)
