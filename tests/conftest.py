"""Pytest configuration and shared fixtures"""

import json
import os

import httpx
import pytest

from directus_sdk.config import Config
from directus_sdk.consts import SESSION_KEYS
from directus_sdk.sdk import DirectusSDK
from directus_sdk.storage import SessionStore

BASE_URL = "https://cms.test"
NOW = 1_700_000_000.0


class FakeDirectus:
    """In-memory Directus API for httpx.MockTransport.

    Routes are keyed by (method, path). A route holds either a
    (status_code, json_body) pair or an exception to raise.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], tuple[int, object] | Exception] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method, path, status_code=200, json_body=None):
        self.routes[(method, path)] = (status_code, json_body)

    def fail(self, method, path, exc):
        self.routes[(method, path)] = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"errors": [{"message": "Route not found"}]})
        if isinstance(route, Exception):
            raise route
        status_code, body = route
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)

    def calls(self, method=None, path=None) -> list[httpx.Request]:
        return [
            r
            for r in self.requests
            if (method is None or r.method == method)
            and (path is None or r.url.path == path)
        ]


def body_of(request: httpx.Request):
    """Decoded JSON body of a recorded request, None when empty"""
    return json.loads(request.content) if request.content else None


def token_response(access="A", refresh="R", expires=60000):
    return {"data": {"access_token": access, "refresh_token": refresh, "expires": expires}}


@pytest.fixture
def api():
    """Fake Directus API"""
    return FakeDirectus()


@pytest.fixture
def http_client(api):
    """httpx.Client wired to the fake API"""
    client = httpx.Client(transport=httpx.MockTransport(api.handler))
    yield client
    client.close()


@pytest.fixture
def config(clean_env):
    """Config fixture for SDK tests"""
    return Config(base_url=BASE_URL, log_level="DEBUG")


@pytest.fixture
def session_state():
    """Mapping backing the session store"""
    return {}


@pytest.fixture
def make_sdk(clean_env, api, session_state):
    """Factory building a DirectusSDK against the fake API with a fixed clock"""
    created = []

    def _make(**settings):
        settings.setdefault("base_url", BASE_URL)
        http_client = httpx.Client(transport=httpx.MockTransport(api.handler))
        sdk = DirectusSDK(
            store=SessionStore(session_state), http_client=http_client, **settings
        )
        sdk.token_manager.clock = lambda: NOW
        created.append(sdk)
        return sdk

    yield _make
    for sdk in created:
        sdk.close()


@pytest.fixture
def sdk(make_sdk):
    """DirectusSDK with default settings"""
    return make_sdk()


@pytest.fixture
def logged_in_state(session_state):
    """Session state holding a valid session record"""
    session_state.update(
        {
            "directus_refresh": "refresh-1",
            "directus_access": "access-1",
            "directus_access_expires": NOW + 600,
        }
    )
    return session_state


def assert_session_cleared(state):
    for key in SESSION_KEYS:
        assert key not in state


@pytest.fixture
def clean_env():
    """Fixture that temporarily clears DIRECTUS_* environment variables.

    This ensures Config tests see the true defaults without interference
    from environment variables that might be set in the user's shell.
    """
    directus_vars = {
        key: value for key, value in os.environ.items() if key.startswith("DIRECTUS_")
    }

    for key in directus_vars:
        os.environ.pop(key, None)

    try:
        yield
    finally:
        for key in list(os.environ):
            if key.startswith("DIRECTUS_"):
                os.environ.pop(key)
        for key, value in directus_vars.items():
            os.environ[key] = value


@pytest.fixture
def clean_config(clean_env):
    """Fixture that provides a Config instance with clean environment."""
    return Config()
