"""Configuration management."""

import logging
from functools import cache
from typing import Literal

import httpx
from pydantic import ConfigDict, Field, computed_field, field_validator
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Immutable SDK configuration, overridable with DIRECTUS_* env vars."""

    model_config = ConfigDict(
        env_prefix="DIRECTUS_", case_sensitive=False, extra="ignore", frozen=True
    )
    base_url: str = Field(
        default="http://localhost:8055",
        description="Base URL of the Directus API",
    )
    auth_storage: Literal["session", "cookie"] = Field(
        default="session",
        description="Backend that holds the refresh/access token session values",
    )
    strip_headers: bool = Field(
        default=False,
        description="Remove transport metadata from item and reset responses",
    )
    auth_token: str | None = Field(
        default=None,
        description="Static API token used when no login session is stored",
    )
    cookie_file: str | None = Field(
        default=None,
        description="Optional cookie jar file persisting the cookie backend",
    )
    log_level: str = Field(
        default="INFO",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
        description="Level of the directus-sdk loggers",
    )
    timeout_seconds: float = Field(
        default=30, gt=0, le=300, description="HTTP read/write timeout in seconds"
    )
    connect_timeout_seconds: float = Field(
        default=10, gt=0, le=300, description="HTTP connect timeout in seconds"
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @computed_field
    @property
    def host(self) -> str:
        """Host name of the API, used to scope cookies."""
        return httpx.URL(self.base_url).host

    @property
    def timeout(self) -> httpx.Timeout:
        """Transport timeouts for the HTTP client."""
        return httpx.Timeout(self.timeout_seconds, connect=self.connect_timeout_seconds)

    def url_for(self, path: str) -> str:
        """Absolute URL for an API path."""
        return f"{self.base_url}{path}"

    def __repr__(self) -> str:
        return (
            f"Config(base_url='{self.base_url}', auth_storage='{self.auth_storage}', "
            f"strip_headers={self.strip_headers})"
        )


@cache
def get_config() -> Config:
    """Get a cached Config instance."""
    return Config()


def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """Configure logging for the entire application"""
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,  # Override any existing configuration
    )
    return logging.getLogger("directus-sdk")
