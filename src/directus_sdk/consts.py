"""High-value constants for the Directus SDK package."""

# Package metadata
PACKAGE_VERSION = "1.0.0"
SDK_NAME = "directus-sdk"
USER_AGENT = f"{SDK_NAME}/{PACKAGE_VERSION}"

# External API contract consts
LOGIN_URL_PATH = "/auth/login"
REFRESH_URL_PATH = "/auth/refresh"
LOGOUT_URL_PATH = "/auth/logout"
PASSWORD_REQUEST_URL_PATH = "/auth/password/request"
PASSWORD_RESET_URL_PATH = "/auth/password/reset"
ITEMS_URL_PATH = "/items"

# Credential store keys
REFRESH_TOKEN_KEY = "directus_refresh"
ACCESS_TOKEN_KEY = "directus_access"
ACCESS_EXPIRES_KEY = "directus_access_expires"
SESSION_KEYS = (REFRESH_TOKEN_KEY, ACCESS_TOKEN_KEY, ACCESS_EXPIRES_KEY)

# Business logic consts
TOKEN_REFRESH_MARGIN_SECONDS = 50  # refresh 50s early
COOKIE_LIFETIME_SECONDS = 604800  # 7 days
