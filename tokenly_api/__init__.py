"""
Tokenly API Client Library

A small client for JSON APIs that sign private requests with HMAC
authentication headers and expose public endpoints without signatures.

Example usage:
    from tokenly_api import APIClient, HmacGenerator

    client = APIClient("https://api.example.com/api/v1", HmacGenerator(),
                       "client-id", "client-secret")
    user = client.get("users/me")
"""

from .auth import Generator, HmacGenerator
from .client import APIClient, CallOptions
from .exceptions import (
    APIClientError,
    APIException,
    ConfigurationError
)
from .transport import RequestsTransport, Response, Transport
from .constants import (
    DEFAULT_CONFIG,
    POST_TYPE_FORM,
    POST_TYPE_JSON
)

__version__ = "1.0.0"
__all__ = [
    "APIClient",
    "CallOptions",
    "Generator",
    "HmacGenerator",
    "Transport",
    "RequestsTransport",
    "Response",
    "APIClientError",
    "APIException",
    "ConfigurationError",
    "DEFAULT_CONFIG",
    "POST_TYPE_FORM",
    "POST_TYPE_JSON"
]
