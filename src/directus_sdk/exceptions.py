"""Directus SDK custom exceptions.

Exception Design Principles:
1. Transport failures and HTTP error answers are NOT exceptions - they are
   returned to the caller as response envelopes
2. Raise only where the SDK itself cannot continue and can add useful context
3. Split on domain of actionable information:
   - Recoverable by user reconfiguration (ConfigError)
   - Unrecoverable except by code or server changes (ParseError)
"""


class DirectusSDKError(Exception):
    """Base exception for all Directus SDK errors.

    Provides rich context and actionable suggestions beyond standard exceptions.
    All Directus SDK custom exceptions inherit from this base class.
    """

    def __init__(
        self,
        message: str,  # the error message
        *,
        errors: list[str] = None,  # detailed list of errors (if available)
        suggestions: list[str] = None,  # remedial actions
        context: dict = None,  # additional detailed context
    ):
        """Initialize DirectusSDKError.

        Args:
            message: Primary error message for users
            errors: List of specific error details
            suggestions: List of actionable suggestions for resolution
            context: Additional context information as key-value pairs
        """
        super().__init__(message)
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        self.context = context or {}


class ConfigError(DirectusSDKError):
    """SDK configuration errors - recoverable by user reconfiguration.

    Covers setup issues that prevent a client from being built:
    - Unknown credential storage backend
    - Missing, unreadable or malformed cookie jar files

    Does NOT include HTTP errors (401, 404, 5xx) - those are returned to the
    caller inside the response envelope.
    """

    pass


class ParseError(DirectusSDKError):
    """Unexpected API response structure - unrecoverable without code changes.

    Used when Directus answers a token request with HTTP 200 but the body
    does not carry the token fields the SDK relies on, indicating an API
    change or a proxy rewriting responses.
    """

    pass
