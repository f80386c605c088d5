"""Credential store backends for the refresh/access token session values."""

import logging
import os
import time
from collections.abc import Callable, MutableMapping
from http.cookiejar import Cookie, CookieJar, LoadError, LWPCookieJar
from typing import Any

import httpx

from .config import Config
from .consts import COOKIE_LIFETIME_SECONDS
from .exceptions import ConfigError
from .protocols import CredentialStore

logger = logging.getLogger("directus-sdk.storage")


class SessionStore:
    """Session-like backend over a caller-owned mapping.

    The mapping is the session scope: pass one per request context (for
    example a web framework's session object) so that every logical user
    keeps its own tokens.
    """

    def __init__(self, state: MutableMapping[str, Any] | None = None):
        self.state = {} if state is None else state

    def set(self, key: str, value: Any) -> None:
        self.state[key] = value

    def get(self, key: str) -> Any | None:
        return self.state.get(key)

    def unset(self, key: str) -> None:
        self.state.pop(key, None)


class CookieStore:
    """Cookie-like backend over an httpx cookie jar.

    Values are stored as cookies scoped to the API host with path ``/`` and a
    fixed 7-day lifetime. Unsetting a value does not remove the cookie: it is
    overwritten with an empty, already-expired cookie of the same name, which
    ``get`` ignores and which is purged from the jar on the next
    ``clear_expired()`` or ``save()``.

    With a ``cookie_file`` the jar is loaded from and written back to an LWP
    cookie file after every change, so a session outlives the process.
    """

    def __init__(
        self,
        domain: str,
        cookie_file: str | None = None,
        cookies: httpx.Cookies | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize CookieStore.

        Args:
            domain: Cookie domain, normally the API host.
            cookie_file: Path of a persistent cookie jar. None keeps cookies in memory.
            cookies: Existing cookie container to write into.
            clock: Source of the current epoch time.

        Raises:
            ConfigError: If the cookie file exists but cannot be read.
        """
        self.domain = domain
        self.clock = clock
        self.cookie_file = os.path.expanduser(cookie_file) if cookie_file else None

        if cookies is not None:
            self.cookies = cookies
        elif self.cookie_file:
            self.cookies = httpx.Cookies(self._load_jar(self.cookie_file))
        else:
            self.cookies = httpx.Cookies(CookieJar())

    def set(self, key: str, value: Any) -> None:
        self._write(key, str(value), int(self.clock()) + COOKIE_LIFETIME_SECONDS)

    def get(self, key: str) -> str | None:
        now = int(self.clock())
        for cookie in self.cookies.jar:
            if (
                cookie.name == key
                and cookie.domain == self.domain
                and cookie.path == "/"
                and not cookie.is_expired(now)
            ):
                return cookie.value
        return None

    def unset(self, key: str) -> None:
        self._write(key, "", int(self.clock()) - 1)

    def clear_expired(self) -> None:
        """Drop expired cookies, including unset tombstones, from the jar."""
        now = int(self.clock())
        jar = self.cookies.jar
        for cookie in [c for c in jar if c.is_expired(now)]:
            jar.clear(cookie.domain, cookie.path, cookie.name)

    def save(self) -> None:
        """Write the jar to the cookie file, dropping expired cookies."""
        self.clear_expired()
        if not self.cookie_file:
            return
        jar = self.cookies.jar
        if not isinstance(jar, LWPCookieJar):
            # Persist in-memory cookies by copying them into a file-backed jar
            file_jar = LWPCookieJar(self.cookie_file)
            for cookie in jar:
                file_jar.set_cookie(cookie)
            jar = file_jar
        try:
            jar.save(self.cookie_file, ignore_discard=True)
            os.chmod(self.cookie_file, 0o600)
        except OSError as e:
            raise ConfigError(
                f"Cannot write cookie file: {self.cookie_file}",
                errors=[str(e)],
                suggestions=["Check the directory exists and is writable"],
                context={"cookie_file": self.cookie_file},
            ) from e

    def _write(self, key: str, value: str, expires: int) -> None:
        self.cookies.jar.set_cookie(
            Cookie(
                version=0,
                name=key,
                value=value,
                port=None,
                port_specified=False,
                domain=self.domain,
                domain_specified=True,
                domain_initial_dot=False,
                path="/",
                path_specified=True,
                secure=False,
                expires=expires,
                discard=False,
                comment=None,
                comment_url=None,
                rest={},
                rfc2109=False,
            )
        )
        if self.cookie_file:
            self.save()

    @staticmethod
    def _load_jar(cookie_file: str) -> LWPCookieJar:
        """Load the persistent jar; a missing file starts an empty one."""
        jar = LWPCookieJar(cookie_file)
        if not os.path.exists(cookie_file):
            logger.debug(f"Cookie file {cookie_file} not found, starting empty")
            return jar

        logger.debug(f"Loading cookies from {cookie_file}")
        try:
            jar.load(ignore_discard=True)
        except (LoadError, OSError) as e:
            raise ConfigError(
                f"Invalid cookie file: {cookie_file}",
                errors=[str(e)],
                suggestions=[
                    "Delete the cookie file to start a fresh session",
                    "Check file permissions",
                ],
                context={"cookie_file": cookie_file},
            ) from e
        return jar


def create_store(
    config: Config, state: MutableMapping[str, Any] | None = None
) -> CredentialStore:
    """Build the credential store selected by ``config.auth_storage``.

    Args:
        config: SDK configuration.
        state: Session mapping for the session backend. Ignored for cookies.

    Raises:
        ConfigError: If the storage backend is unknown or its file is unreadable.
    """
    if config.auth_storage == "session":
        return SessionStore(state)
    if config.auth_storage == "cookie":
        return CookieStore(config.host, cookie_file=config.cookie_file)
    raise ConfigError(
        f"Unknown auth storage: {config.auth_storage}",
        suggestions=["Use auth_storage='session' or auth_storage='cookie'"],
        context={"auth_storage": config.auth_storage},
    )
