"""Hard-coded fallbacks used when neither the request nor the settings say otherwise."""

DEFAULT_API_VERSION = "v1"
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY_MILLISECONDS = 1000
DEFAULT_SHOULD_RETRY = False

DEFAULT_AUTH_SCHEME = "OAuth2"
DEFAULT_CONTENT_TYPE = "application/json"
DEFAULT_DEVICE_ID = "web"

HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_DEVICE_ID = "X-Device-Id"

RETRIES_EXHAUSTED_STATUS = 500
RETRIES_EXHAUSTED_BODY = "All retries failed"
