"""
HTTP transport used by the API client.

The client only depends on the ``Transport`` protocol; ``RequestsTransport``
is the default implementation built on a ``requests.Session``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol

import requests

from .constants import DEFAULT_CONFIG
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Methods whose mapping bodies travel in the query string
QUERY_METHODS = ('GET', 'HEAD', 'DELETE')


@dataclass(frozen=True)
class Response:
    """Raw transport response."""
    status_code: int
    body: str


class Transport(Protocol):
    """Capability performing the actual HTTP exchange."""

    def request(self, url: str, headers: Dict[str, str], body: Any, method: str,
                options: Optional[Dict[str, Any]] = None) -> Response:
        ...


class RequestsTransport:
    """
    Transport backed by ``requests``.

    Network failures (``requests.RequestException``) are not caught here and
    reach the caller unchanged.
    """

    def __init__(self, session: Optional[requests.Session] = None, **config):
        """
        Initialize transport.

        Args:
            session: Optional pre-configured requests session
            **config: Configuration options (timeout)
        """
        self.config = {**DEFAULT_CONFIG, **config}
        self._validate_config()

        self.session = session if session is not None else requests.Session()

    def _validate_config(self):
        """Validate transport configuration."""
        timeout = self.config['timeout']
        if timeout is not None and timeout <= 0:
            raise ConfigurationError("timeout must be positive")

    def request(self, url: str, headers: Dict[str, str], body: Any, method: str,
                options: Optional[Dict[str, Any]] = None) -> Response:
        """
        Send a request and return status code and body text.

        Args:
            url: Full request URL
            headers: Request headers
            body: Mapping, string or None
            method: HTTP method
            options: Extra ``requests`` keyword arguments (timeout, verify, ...)

        Returns:
            Response with status code and decoded body
        """
        method = method.upper()
        kwargs = dict(options or {})
        kwargs.setdefault('timeout', self.config['timeout'])
        kwargs['headers'] = dict(headers or {})

        if body is not None:
            if method in ('GET', 'HEAD'):
                kwargs['params'] = body
            elif isinstance(body, Mapping) and method in QUERY_METHODS:
                kwargs['params'] = body
            else:
                kwargs['data'] = body

        logger.debug("%s %s", method, url)
        resp = self.session.request(method, url, **kwargs)
        logger.debug("%s %s -> %s", method, url, resp.status_code)

        return Response(status_code=resp.status_code, body=resp.text)

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
