"""Directus SDK Package

A synchronous client for the Directus REST API with transparent access
token refresh over session- or cookie-backed credential storage.
"""

from .auth import TokenManager
from .client import DirectusClient
from .config import Config, get_config, setup_logging
from .consts import PACKAGE_VERSION
from .exceptions import ConfigError, DirectusSDKError, ParseError
from .items import ItemsService
from .models import AuthResult, Method, TokenGrant
from .sdk import DirectusSDK, get_sdk
from .session import SessionService
from .storage import CookieStore, SessionStore, create_store

__version__ = PACKAGE_VERSION

__all__ = [
    "__version__",
    "get_config",
    "get_sdk",
    "setup_logging",
    "create_store",
    "Config",
    "DirectusSDK",
    "DirectusClient",
    "TokenManager",
    "ItemsService",
    "SessionService",
    "SessionStore",
    "CookieStore",
    "AuthResult",
    "Method",
    "TokenGrant",
    "DirectusSDKError",
    "ConfigError",
    "ParseError",
]
