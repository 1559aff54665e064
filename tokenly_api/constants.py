"""
Constants for the Tokenly API client library.
"""

# Authentication header names, formatted with the generator namespace
HEADER_AUTH_API_TOKEN = "X-{namespace}-Auth-Api-Token"
HEADER_AUTH_NONCE = "X-{namespace}-Auth-Nonce"
HEADER_AUTH_SIGNATURE = "X-{namespace}-Auth-Signature"

DEFAULT_AUTH_NAMESPACE = "Tokenly"

# Body encodings for non-GET requests
POST_TYPE_JSON = "json"
POST_TYPE_FORM = "form"
POST_TYPES = (POST_TYPE_JSON, POST_TYPE_FORM)

JSON_HEADERS = {
    'Content-Type': 'application/json',
    'Accept': 'application/json',
}

# Default configuration values
DEFAULT_CONFIG = {
    'timeout': 30,                          # HTTP timeout in seconds
    'post_type': POST_TYPE_JSON,
}

# Status codes in [BAD_STATUS_MIN, BAD_STATUS_MAX) are failures
BAD_STATUS_MIN = 400
BAD_STATUS_MAX = 600

DEFAULT_ERROR_CODE = 1
UNEXPECTED_RESPONSE_MESSAGE = "Unexpected response"

# Environment variable prefix used by APIClient.from_env()
DEFAULT_ENV_PREFIX = "TOKENLY_API"
