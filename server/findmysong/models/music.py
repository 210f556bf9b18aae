from pydantic import BaseModel, ConfigDict


def _to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


class LyricHit(BaseModel):
    """A single song hit from the lyrics provider."""

    model_config = ConfigDict(frozen=True)

    title: str
    artist: str
    source_url: str
    image_url: str | None = None


class TrackMatch(BaseModel):
    """A catalog track normalized from the raw search item."""

    model_config = ConfigDict(frozen=True)

    name: str
    artists: tuple[str, ...] = ()
    external_url: str | None = None
    preview_url: str | None = None
    image_url: str | None = None


class TrackLookup(BaseModel):
    """Outcome of one best-effort catalog lookup: a track, nothing, or an error."""

    model_config = ConfigDict(frozen=True)

    track: TrackMatch | None = None
    error: str | None = None

    @property
    def found(self) -> bool:
        return self.track is not None


class AggregatedResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=_to_camel, frozen=True)

    title: str
    artist: str
    lyrics_url: str
    track_url: str | None = None
    preview_url: str | None = None
    image_url: str | None = None
