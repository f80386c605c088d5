from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from .exceptions import ParseError

# =============================================================================
# REQUEST MODELS
# =============================================================================


class Method(StrEnum):
    """HTTP verbs understood by the request executor."""

    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    DELETE = "DELETE"


# =============================================================================
# RESPONSE ENVELOPE HELPERS
# =============================================================================
# Envelopes are plain dicts: {"data": ..., "headers": {"http_code": ...}}
# or {"errors": <code>, "headers": {...}} for transport failures.


def http_code(envelope: dict[str, Any]) -> int:
    """HTTP status of an envelope, 0 when the request never got an answer."""
    return (envelope.get("headers") or {}).get("http_code", 0)


def without_headers(envelope: dict[str, Any]) -> dict[str, Any]:
    """Copy of the envelope with the transport metadata removed."""
    return {k: v for k, v in envelope.items() if k != "headers"}


# =============================================================================
# AUTH MODELS
# =============================================================================


class TokenGrant(BaseModel):
    """Token set returned by /auth/login and /auth/refresh."""

    access_token: str = Field(..., description="Short-lived bearer credential")
    refresh_token: str = Field(..., description="Credential exchanged for new tokens")
    expires: int = Field(..., description="Milliseconds until the access token expires")

    @classmethod
    def from_envelope(cls, envelope: dict[str, Any]) -> "TokenGrant":
        """Extract the grant from a decoded response body.

        Raises:
            ParseError: If the body has no usable token data.
        """
        try:
            return cls.model_validate(envelope.get("data"))
        except ValidationError as e:
            raise ParseError(
                "Directus returned a token response without token data",
                errors=[err["msg"] for err in e.errors()],
                suggestions=[
                    "Check that base_url points at the Directus API root",
                    "This may indicate an API change",
                ],
                context={"http_code": http_code(envelope)},
            ) from e


class AuthResult(BaseModel):
    """Uniform outcome of the login/logout/password operations.

    Truthy on success, so ``if sdk.auth_user(...):`` reads naturally. Failed
    results carry the response envelope when the operation surfaces one.
    """

    status: Literal["success", "error"] = Field(
        ..., description="Outcome of the operation"
    )
    message: str = Field(..., description="Human-readable summary")
    response: dict[str, Any] | None = Field(
        None, description="Response envelope of a failed call, when surfaced"
    )

    def __bool__(self) -> bool:
        return self.status == "success"

    @classmethod
    def success(cls, message: str) -> "AuthResult":
        return cls(status="success", message=message)

    @classmethod
    def failure(
        cls, message: str, response: dict[str, Any] | None = None
    ) -> "AuthResult":
        return cls(status="error", message=message, response=response)
