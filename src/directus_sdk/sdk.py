"""DirectusSDK facade wiring configuration, storage, auth and services."""

import logging
from collections.abc import MutableMapping
from functools import cache
from typing import Any

import httpx

from .auth import TokenManager
from .client import DirectusClient, build_http_client
from .config import Config, get_config
from .items import ItemId, ItemsService
from .models import AuthResult
from .protocols import CredentialStore
from .session import SessionService
from .storage import create_store

logger = logging.getLogger("directus-sdk.sdk")


class DirectusSDK:
    """Single entry point for item CRUD and authentication.

    Example::

        sdk = DirectusSDK(base_url="https://cms.example.com", strip_headers=True)
        if sdk.auth_user("editor@example.com", "secret"):
            posts = sdk.get_items("posts", {"filter": {"status": {"_eq": "published"}}})
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        store: CredentialStore | None = None,
        session_state: MutableMapping[str, Any] | None = None,
        http_client: httpx.Client | None = None,
        **settings,
    ):
        """Initialize DirectusSDK.

        Args:
            config: Config instance. If None, built from settings or get_config().
            store: Credential store. If None, created from config.auth_storage.
            session_state: Mapping backing the session store, one per user session.
            http_client: HTTP client. If None, creates a new one.
            **settings: Config field overrides, e.g. base_url="...".
        """
        if settings:
            base = config.model_dump(exclude={"host"}) if config else {}
            config = Config(**{**base, **settings})
        self.config = config or get_config()
        logging.getLogger("directus-sdk").setLevel(self.config.log_level)

        self.store = store or create_store(self.config, session_state)
        self.http_client = http_client or build_http_client(self.config)
        self.token_manager = TokenManager(self.config, self.store, self.http_client)
        self.client = DirectusClient(self.config, self.token_manager, self.http_client)
        self.items = ItemsService(self.client)
        self.session = SessionService(self.client, self.token_manager)

    def auth_token(self, token: str | None) -> None:
        """Set the static API token used when no login session is stored."""
        self.token_manager.static_token = token

    def get_value(self, key: str) -> Any | None:
        """Read a stored session value, e.g. "directus_access"."""
        return self.store.get(key)

    # Items

    def get_items(
        self, collection: str, data: dict[str, Any] | ItemId | None = None
    ) -> dict[str, Any]:
        return self.items.get_items(collection, data)

    def create_items(self, collection: str, fields: Any) -> dict[str, Any]:
        return self.items.create_items(collection, fields)

    def update_items(
        self, collection: str, fields: Any, item_id: ItemId | None = None
    ) -> dict[str, Any]:
        return self.items.update_items(collection, fields, item_id)

    def delete_items(
        self, collection: str, item_id: ItemId | list | tuple | set
    ) -> dict[str, Any]:
        return self.items.delete_items(collection, item_id)

    # Auth

    def auth_user(
        self, email: str, password: str, otp: str | None = None
    ) -> AuthResult:
        return self.session.auth_user(email, password, otp)

    def auth_logout(self) -> AuthResult:
        return self.session.auth_logout()

    def auth_password_request(
        self, email: str, reset_url: str | None = None
    ) -> AuthResult:
        return self.session.auth_password_request(email, reset_url)

    def auth_password_reset(self, token: str, password: str) -> AuthResult:
        return self.session.auth_password_reset(token, password)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "DirectusSDK":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


@cache
def get_sdk() -> DirectusSDK:
    """Get a cached DirectusSDK instance with default configuration.

    Raises:
        No exceptions raised directly.
        May propagate exceptions from Config() initialization via get_config().
    """
    return DirectusSDK()
