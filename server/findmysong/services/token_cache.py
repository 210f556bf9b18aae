"""Client-credentials token cache for the Spotify Web API.

The cache holds a single bearer credential for the whole process. It is
refreshed lazily: callers ask for a token and only a miss (no token yet,
or a token inside the safety margin of its expiry) triggers an exchange
with the identity provider. Concurrent callers during a miss share the
one refresh.
"""

import asyncio
import logging
import time
from collections.abc import Callable

import httpx
from pydantic import BaseModel, ConfigDict

from findmysong.exceptions import ConfigurationError, CredentialError

logger = logging.getLogger(__name__)


class Credential(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: str
    expires_at: float
    # Renewal point: expires_at minus the safety margin, never at or before issue time
    renew_at: float


class TokenCache:
    """Process-wide holder of the catalog access token."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        client_id: str,
        client_secret: str,
        token_url: str,
        safety_margin: float = 5.0,
        timeout: float = 8.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._http = http
        self._client_id = client_id
        self._client_secret = client_secret
        self._token_url = token_url
        self._safety_margin = safety_margin
        self._timeout = timeout
        self._clock = clock
        self._credential: Credential | None = None
        self._lock = asyncio.Lock()

    @property
    def credential(self) -> Credential | None:
        return self._credential

    def _is_fresh(self, credential: Credential | None) -> bool:
        return credential is not None and self._clock() < credential.renew_at

    async def get_token(self) -> str:
        """Return a valid access token, exchanging client credentials on a miss."""
        credential = self._credential
        if self._is_fresh(credential):
            return credential.value

        async with self._lock:
            # Another caller may have refreshed while we waited on the lock
            credential = self._credential
            if self._is_fresh(credential):
                return credential.value

            self._credential = await self._refresh()
            return self._credential.value

    async def _refresh(self) -> Credential:
        if not self._client_id or not self._client_secret:
            raise ConfigurationError("SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET are not set")

        requested_at = self._clock()
        try:
            response = await self._http.post(
                self._token_url,
                data={"grant_type": "client_credentials"},
                auth=(self._client_id, self._client_secret),
                timeout=self._timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise CredentialError(f"Token exchange failed: {e}") from e

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            raise CredentialError("Identity provider returned no access_token")

        try:
            ttl = float(payload["expires_in"])
        except (KeyError, TypeError, ValueError) as e:
            raise CredentialError("Identity provider returned no valid expires_in") from e
        if ttl <= 0:
            raise CredentialError("Identity provider returned a non-positive expires_in")

        # Short-lived tokens keep at least half their lifetime usable
        margin = min(self._safety_margin, ttl / 2)
        logger.info("Spotify token issued, expires in %ss", payload["expires_in"])
        return Credential(
            value=token,
            expires_at=requested_at + ttl,
            renew_at=requested_at + ttl - margin,
        )
