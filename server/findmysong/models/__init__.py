from findmysong.models.music import AggregatedResult, LyricHit, TrackLookup, TrackMatch
from findmysong.models.users import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse, UserOut
from findmysong.models.collection import PlaylistCreate, PlaylistDetail, PlaylistOut, SavedTrack, SavedTrackOut

__all__ = [
    "AggregatedResult",
    "LyricHit",
    "TrackLookup",
    "TrackMatch",
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "RegisterResponse",
    "UserOut",
    "PlaylistCreate",
    "PlaylistDetail",
    "PlaylistOut",
    "SavedTrack",
    "SavedTrackOut",
]
