"""Access token management with transparent refresh."""

import logging
import time
from collections.abc import Callable
from typing import Any

import httpx

from .config import Config
from .consts import (
    ACCESS_EXPIRES_KEY,
    ACCESS_TOKEN_KEY,
    LOGOUT_URL_PATH,
    REFRESH_TOKEN_KEY,
    REFRESH_URL_PATH,
    SESSION_KEYS,
    TOKEN_REFRESH_MARGIN_SECONDS,
)
from .exceptions import ParseError
from .models import TokenGrant
from .protocols import CredentialStore

logger = logging.getLogger("directus-sdk.auth")


class TokenManager:
    """Access token manager.

    Responsibilities:
    - Keep the session record (refresh token, access token, expiry) in the store
    - Refresh the access token shortly before it expires
    - Fall back to a static API token when no session is stored
    """

    def __init__(
        self,
        config: Config,
        store: CredentialStore,
        http_client: httpx.Client,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize TokenManager.

        Args:
            config: Config instance with base URL and optional static token.
            store: Credential store holding the session values.
            http_client: HTTP client (for refresh and forced logout only).
            clock: Source of the current epoch time in seconds.
        """
        self.config = config
        self.store = store
        self.http_client = http_client
        self.clock = clock
        self.static_token: str | None = config.auth_token

    @property
    def refresh_token(self) -> str | None:
        return self.store.get(REFRESH_TOKEN_KEY) or None

    def get_access_token(self) -> str | None:
        """Get a usable bearer token, refreshing the session when needed.

        Returns:
            The session access token, else the static API token, else None.
            None is also returned when a refresh is rejected; the session is
            cleared in that case.

        Raises:
            ParseError: If a refresh answers 200 without token data.
        """
        refresh_token = self.refresh_token
        if refresh_token:
            if self._needs_refresh():
                return self._refresh(refresh_token)
            return self.store.get(ACCESS_TOKEN_KEY)

        if self.static_token:
            return self.static_token

        return None

    def store_session(self, grant: TokenGrant) -> None:
        """Persist a token grant, converting its lifetime to an absolute expiry."""
        expires_at = self.clock() + grant.expires / 1000
        self.store.set(REFRESH_TOKEN_KEY, grant.refresh_token)
        self.store.set(ACCESS_TOKEN_KEY, grant.access_token)
        self.store.set(ACCESS_EXPIRES_KEY, expires_at)

    def clear_session(self) -> None:
        for key in SESSION_KEYS:
            self.store.unset(key)

    def _needs_refresh(self) -> bool:
        """Check if the stored access token expires within the safety margin."""
        expires = self.store.get(ACCESS_EXPIRES_KEY)
        if expires is None:
            return True

        try:
            expires_at = float(expires)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring unreadable token expiry {expires!r}")
            return True

        return expires_at <= self.clock() + TOKEN_REFRESH_MARGIN_SECONDS

    def _refresh(self, refresh_token: str) -> str | None:
        """Exchange the refresh token for a new token set."""
        logger.debug("Refreshing access token")

        try:
            response = self.http_client.post(
                self.config.url_for(REFRESH_URL_PATH),
                json={"refresh_token": refresh_token},
            )
        except httpx.RequestError as e:
            logger.warning(f"Token refresh failed: {type(e).__name__}: {e}")
            self._force_logout(refresh_token)
            return None

        if response.status_code != 200:
            logger.warning(
                f"Token refresh rejected with HTTP {response.status_code}, "
                "clearing session"
            )
            self._force_logout(refresh_token)
            return None

        grant = TokenGrant.from_envelope(self._decode(response))
        self.store_session(grant)
        logger.info("Access token refreshed")
        return grant.access_token

    def _force_logout(self, refresh_token: str) -> None:
        """Tell the server to drop the session, then clear it locally regardless."""
        try:
            response = self.http_client.post(
                self.config.url_for(LOGOUT_URL_PATH),
                json={"refresh_token": refresh_token},
            )
            logger.debug(f"Forced logout answered HTTP {response.status_code}")
        except httpx.RequestError as e:
            logger.warning(f"Forced logout failed: {type(e).__name__}: {e}")
        finally:
            self.clear_session()

    @staticmethod
    def _decode(response: httpx.Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as e:
            raise ParseError(
                "Directus returned a non-JSON token response",
                errors=[str(e)],
                context={"url": str(response.url)},
            ) from e
        return payload if isinstance(payload, dict) else {}
