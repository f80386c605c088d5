"""Login, logout and password flows with session bookkeeping."""

import logging

from .auth import TokenManager
from .client import DirectusClient
from .consts import (
    LOGIN_URL_PATH,
    LOGOUT_URL_PATH,
    PASSWORD_REQUEST_URL_PATH,
    PASSWORD_RESET_URL_PATH,
)
from .models import AuthResult, Method, TokenGrant, http_code

logger = logging.getLogger("directus-sdk.session")


class SessionService:
    """Auth operations of the email/password + refresh token flow.

    Each operation returns an AuthResult. The amount of error detail differs
    per operation:
    - auth_user, auth_logout: the full response envelope
    - auth_password_reset: the envelope, header-stripped per configuration
    - auth_password_request: none
    """

    def __init__(self, client: DirectusClient, token_manager: TokenManager):
        self.client = client
        self.token_manager = token_manager

    def auth_user(
        self, email: str, password: str, otp: str | None = None
    ) -> AuthResult:
        """Log in and store the session record.

        Raises:
            ParseError: If the login answers 200 without token data.
        """
        data = {"email": email, "password": password}
        if otp:
            data["otp"] = otp

        response = self.client.make_call(
            LOGIN_URL_PATH, data, Method.POST, authenticated=False
        )
        if http_code(response) != 200:
            logger.warning(f"Login failed with HTTP {http_code(response)}")
            return AuthResult.failure("Login failed", response)

        self.token_manager.store_session(TokenGrant.from_envelope(response))
        logger.info("Logged in")
        return AuthResult.success("Logged in")

    def auth_logout(self) -> AuthResult:
        """Invalidate the refresh token on the server and clear the session."""
        data = {"refresh_token": self.token_manager.refresh_token}
        response = self.client.make_call(
            LOGOUT_URL_PATH, data, Method.POST, authenticated=False
        )
        if http_code(response) != 200:
            logger.warning(f"Logout failed with HTTP {http_code(response)}")
            return AuthResult.failure("Logout failed", response)

        self.token_manager.clear_session()
        logger.info("Logged out")
        return AuthResult.success("Logged out")

    def auth_password_request(
        self, email: str, reset_url: str | None = None
    ) -> AuthResult:
        """Ask Directus to email a password reset link."""
        data = {"email": email}
        if reset_url:
            data["reset_url"] = reset_url

        response = self.client.make_call(PASSWORD_REQUEST_URL_PATH, data, Method.POST)
        if http_code(response) != 200:
            logger.debug(f"Password request failed with HTTP {http_code(response)}")
            return AuthResult.failure("Password reset request failed")
        return AuthResult.success("Password reset requested")

    def auth_password_reset(self, token: str, password: str) -> AuthResult:
        """Set a new password using the token from the reset email."""
        data = {"token": token, "password": password}
        response = self.client.make_call(PASSWORD_RESET_URL_PATH, data, Method.POST)
        if http_code(response) != 200:
            logger.warning(f"Password reset failed with HTTP {http_code(response)}")
            return AuthResult.failure(
                "Password reset failed", self.client.strip_headers(response)
            )
        return AuthResult.success("Password reset")
