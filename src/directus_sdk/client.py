"""Directus client: handles low-level API calls."""

import logging
import time
from collections.abc import Mapping
from typing import Any

import httpx

from .auth import TokenManager
from .config import Config, get_config
from .consts import USER_AGENT
from .models import Method, without_headers
from .protocols import TokenProvider
from .storage import create_store

logger = logging.getLogger("directus-sdk.client")


def build_http_client(config: Config, **kwargs) -> httpx.Client:
    """Create the blocking HTTP client shared by the SDK components.

    Args:
        config: Config instance supplying timeouts.
        **kwargs: Additional arguments for httpx.Client (e.g. transport).
    """
    return httpx.Client(
        headers={"User-Agent": USER_AGENT, "Content-Type": "application/json"},
        timeout=config.timeout,
        follow_redirects=True,
        **kwargs,
    )


def build_query(data: Mapping[str, Any]) -> list[tuple[str, str]]:
    """Flatten nested query data into bracketed key/value pairs.

    ``{"filter": {"status": {"_eq": "draft"}}, "fields": ["id", "title"]}``
    becomes ``filter[status][_eq]=draft&fields[0]=id&fields[1]=title``.
    Booleans are sent as ``1``/``0`` and None values are dropped.
    """
    pairs: list[tuple[str, str]] = []

    def visit(prefix: str, value: Any) -> None:
        if value is None:
            return
        if isinstance(value, Mapping):
            for key, item in value.items():
                visit(f"{prefix}[{key}]", item)
        elif isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                visit(f"{prefix}[{index}]", item)
        elif isinstance(value, bool):
            pairs.append((prefix, "1" if value else "0"))
        else:
            pairs.append((prefix, str(value)))

    for key, value in data.items():
        visit(str(key), value)
    return pairs


class DirectusClient:
    """Directus API client with authentication.

    Responsibilities:
    - Build and send one request per call, attaching the bearer token
    - Normalize every answer into a response envelope
    - Never raise on transport failures or HTTP error codes
    """

    def __init__(
        self,
        config: Config | None = None,
        token_provider: TokenProvider | None = None,
        http_client: httpx.Client | None = None,
    ):
        """Initialize DirectusClient.

        Args:
            config: Config instance. If None, uses get_config().
            token_provider: Bearer token provider. If None, creates a TokenManager
                over the configured credential store.
            http_client: HTTP client. If None, creates a new one.
        """
        self.config = config or get_config()
        self.http_client = http_client or build_http_client(self.config)
        self.token_provider = token_provider or TokenManager(
            self.config, create_store(self.config), self.http_client
        )

        logger.info(f"Directus client created for {self.config.base_url}")

    def make_call(
        self,
        path: str,
        data: Any = None,
        method: Method | str = Method.GET,
        *,
        authenticated: bool = True,
    ) -> dict[str, Any]:
        """Send one request and return its response envelope.

        Args:
            path: API path appended to the base URL, e.g. "/items/posts".
            data: Query data for GET, JSON body for the other verbs.
            method: HTTP verb.
            authenticated: Whether to ask the token provider for a bearer token.

        Returns:
            The decoded JSON body with a "headers" entry of transport metadata,
            or {"errors": <error name>, "headers": {...}} on transport failure.

        Raises:
            ValueError: For a verb outside Method, or GET data that is not a
                mapping.
            ParseError: From the token provider if a refresh response is malformed.
        """
        request = self.build_request(
            path, data, Method(method), authenticated=authenticated
        )

        logger.debug(f"{request.method} {request.url}")
        started = time.perf_counter()
        try:
            response = self.http_client.send(request)
        except httpx.RequestError as e:
            logger.warning(f"{request.method} {request.url} failed: {e!r}")
            return {
                "errors": type(e).__name__,
                "headers": {
                    "http_code": 0,
                    "url": str(request.url),
                    "method": request.method,
                },
            }

        logger.debug(f"{request.method} {request.url} -> {response.status_code}")
        result = self._decode(response)
        result["headers"] = self._transport_info(
            response, time.perf_counter() - started
        )
        return result

    def build_request(
        self,
        path: str,
        data: Any,
        method: Method,
        *,
        authenticated: bool = True,
    ) -> httpx.Request:
        """Build the request for a verb: query string for GET, JSON body otherwise."""
        kwargs: dict[str, Any] = {}
        if data:
            if method is Method.GET:
                if not isinstance(data, Mapping):
                    raise ValueError(
                        f"GET data must be a mapping of query parameters, "
                        f"got {type(data).__name__}"
                    )
                kwargs["params"] = build_query(data)
            else:
                kwargs["json"] = data

        headers = {"Content-Type": "application/json"}
        if authenticated:
            token = self.token_provider.get_access_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"

        return self.http_client.build_request(
            method.value, self.config.url_for(path), headers=headers, **kwargs
        )

    def strip_headers(self, envelope: dict[str, Any]) -> dict[str, Any]:
        """Drop transport metadata when the configuration asks for it."""
        if not self.config.strip_headers:
            return envelope
        return without_headers(envelope)

    def close(self) -> None:
        self.http_client.close()

    def __enter__(self) -> "DirectusClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @staticmethod
    def _decode(response: httpx.Response) -> dict[str, Any]:
        """Decode the body into the envelope; non-object JSON goes under "data"."""
        if not response.content:
            return {}

        try:
            payload = response.json()
        except ValueError:
            logger.warning(
                f"Undecodable {response.headers.get('content-type')} body "
                f"from {response.url}"
            )
            return {}

        if isinstance(payload, dict):
            return payload
        return {"data": payload}

    @staticmethod
    def _transport_info(
        response: httpx.Response, total_time: float
    ) -> dict[str, Any]:
        return {
            "http_code": response.status_code,
            "url": str(response.url),
            "method": response.request.method,
            "content_type": response.headers.get("content-type"),
            "total_time": total_time,
            "response_headers": dict(response.headers),
        }
