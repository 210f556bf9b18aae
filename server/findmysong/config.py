from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env from the project root (one level above server/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Music catalog (Spotify client credentials)
    spotify_client_id: str = ""
    spotify_client_secret: str = ""
    spotify_token_url: str = "https://accounts.spotify.com/api/token"
    spotify_api_url: str = "https://api.spotify.com/v1"

    # Lyrics provider
    genius_access_token: str = ""
    genius_api_url: str = "https://api.genius.com"

    # Infrastructure
    database_url: str = ""

    # Session tokens
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 7

    # Upstream call tuning
    http_timeout_seconds: float = 8.0
    token_safety_margin_seconds: float = 5.0
    catalog_search_limit: int = 20
    catalog_match_limit: int = 5
    catalog_concurrency: int = 5
    lyrics_max_hits: int = 25
    lyrics_query_suffix: str = "lyrics song"

    # App settings
    cors_origins: str = "http://localhost:5173,http://localhost:4173"
    log_level: str = "INFO"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",")]


settings = Settings()
