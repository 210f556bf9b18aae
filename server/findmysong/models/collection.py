from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from findmysong.models.music import _to_camel


class SavedTrack(BaseModel):
    """A track as the frontend persists it in likes, library or a playlist."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=_to_camel)

    track_id: str = Field(min_length=1)
    title: str
    artist: str = ""
    track_url: str | None = None
    preview_url: str | None = None
    image_url: str | None = None
    lyrics_url: str | None = None


class SavedTrackOut(SavedTrack):
    created_at: datetime | None = None


class PlaylistCreate(BaseModel):
    name: str = ""


class PlaylistOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=_to_camel)

    id: int
    name: str
    created_at: datetime | None = None


class PlaylistDetail(PlaylistOut):
    tracks: list[SavedTrackOut] = []
