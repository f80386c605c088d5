"""Protocol definitions for dependency injection and interface contracts."""

from typing import Any, Protocol


class TokenProvider(Protocol):
    """Protocol for authentication token providers."""

    def get_access_token(self) -> str | None:
        """Get a usable bearer token.

        Returns:
            Bearer token string, or None when requests must go unauthenticated.
        """
        ...


class CredentialStore(Protocol):
    """Protocol for the key-value backends holding session values."""

    def set(self, key: str, value: Any) -> None: ...

    def get(self, key: str) -> Any | None: ...

    def unset(self, key: str) -> None: ...
