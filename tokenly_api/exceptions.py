"""
Custom exceptions for the Tokenly API client library.
"""

from .constants import DEFAULT_ERROR_CODE


class APIClientError(Exception):
    """Base exception for API client errors."""
    pass


class APIException(APIClientError):
    """
    Raised when the remote API reports an error or returns an unusable body.

    ``code`` is the HTTP status code for status-driven failures, otherwise
    the default application error code (1).
    """

    def __init__(self, message, code: int = DEFAULT_ERROR_CODE):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self):
        return str(self.message)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.message!r}, code={self.code})"


class ConfigurationError(APIClientError):
    """Raised when client, transport or signer configuration is invalid."""
    pass
