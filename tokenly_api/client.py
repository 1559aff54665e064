"""
JSON API client with optional HMAC request signing.

Private endpoints are signed by the configured authentication generator,
public endpoints are called without signature headers. Every response is
decoded as JSON and either returned or turned into an ``APIException``.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from .auth import Generator
from .constants import (
    BAD_STATUS_MAX,
    BAD_STATUS_MIN,
    DEFAULT_CONFIG,
    DEFAULT_ENV_PREFIX,
    DEFAULT_ERROR_CODE,
    JSON_HEADERS,
    POST_TYPE_JSON,
    POST_TYPES,
    UNEXPECTED_RESPONSE_MESSAGE
)
from .exceptions import APIException, ConfigurationError
from .transport import RequestsTransport, Response, Transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallOptions:
    """Per-call options."""
    post_type: str = DEFAULT_CONFIG['post_type']
    public: bool = False

    def __post_init__(self):
        if self.post_type not in POST_TYPES:
            raise ConfigurationError(f"unsupported post_type: {self.post_type!r}")

    @classmethod
    def resolve(cls, options: Union['CallOptions', Mapping[str, Any], None]) -> 'CallOptions':
        """Merge caller options over the defaults."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options

        options = dict(options)
        post_type = options.pop('post_type', options.pop('postType', DEFAULT_CONFIG['post_type']))
        return cls(post_type=post_type, public=bool(options.get('public', False)))


class APIClient:
    """
    Client for a JSON API using HMAC-signed private endpoints.

    The authentication generator and transport are collaborators supplied by
    the caller; the client itself keeps no per-call state.
    """

    def __init__(self, api_base_url: str, authentication_generator: Optional[Generator] = None,
                 client_id: Optional[str] = None, client_secret: Optional[str] = None,
                 transport: Optional[Transport] = None):
        """
        Initialize API client.

        Args:
            api_base_url: Base URL every call path is appended to
            authentication_generator: Signer for non-public calls
            client_id: Client id passed to the signer
            client_secret: Client secret passed to the signer
            transport: HTTP transport (defaults to RequestsTransport)
        """
        self.api_base_url = api_base_url
        self.authentication_generator = authentication_generator
        self.client_id = client_id
        self.client_secret = client_secret
        self.transport = transport if transport is not None else RequestsTransport()

    @classmethod
    def from_env(cls, authentication_generator: Optional[Generator] = None,
                 transport: Optional[Transport] = None,
                 prefix: str = DEFAULT_ENV_PREFIX) -> 'APIClient':
        """
        Build a client from ``<prefix>_BASE_URL``, ``<prefix>_CLIENT_ID``
        and ``<prefix>_CLIENT_SECRET``.

        Raises:
            ConfigurationError: If the base URL variable is not set
        """
        base_url = (os.getenv(f"{prefix}_BASE_URL") or "").strip().rstrip('/')
        if not base_url:
            raise ConfigurationError(f"Missing env var {prefix}_BASE_URL")

        return cls(
            base_url,
            authentication_generator=authentication_generator,
            client_id=os.getenv(f"{prefix}_CLIENT_ID") or None,
            client_secret=os.getenv(f"{prefix}_CLIENT_SECRET") or None,
            transport=transport,
        )

    def get(self, url: str, params: Any = None) -> Any:
        """Make signed GET request."""
        return self.call('GET', url, params)

    def get_public(self, url: str, params: Any = None) -> Any:
        """Make unsigned GET request."""
        return self.call('GET', url, params, CallOptions(public=True))

    def post(self, url: str, params: Any = None) -> Any:
        """Make signed POST request."""
        return self.call('POST', url, params)

    def put(self, url: str, params: Any = None) -> Any:
        """Make signed PUT request."""
        return self.call('PUT', url, params)

    def patch(self, url: str, params: Any = None) -> Any:
        """Make signed PATCH request."""
        return self.call('PATCH', url, params)

    def delete(self, url: str, params: Any = None) -> Any:
        """Make signed DELETE request."""
        return self.call('DELETE', url, params)

    def call(self, method: str, url: str, params: Any = None,
             options: Union[CallOptions, Mapping[str, Any], None] = None) -> Any:
        """
        Call the API and return the decoded JSON response.

        Args:
            method: HTTP method
            url: Path relative to the base URL
            params: Query parameters (GET) or request body
            options: CallOptions or a mapping with post_type / public

        Returns:
            Decoded JSON response

        Raises:
            APIException: If the response is not JSON or reports an error
        """
        full_url = self.build_url(url)
        return self._fetch_from_api(method.upper(), full_url, params, CallOptions.resolve(options))

    def build_url(self, url: str) -> str:
        """Join the base URL and a call path, dropping the trailing slash."""
        return f"{self.api_base_url}/{url.rstrip('/')}"

    def _build_authentication_headers(self, method: str, url: str, params: Any,
                                      headers: Dict[str, str]) -> Dict[str, str]:
        if self.authentication_generator is None:
            return headers
        return self.authentication_generator.add_signature_to_headers(
            method, url, params, self.client_id, self.client_secret, headers
        )

    def _prepare_request_body(self, method: str, params: Any, options: CallOptions,
                              headers: Dict[str, str]) -> Any:
        """Return the body to send, adding content headers to ``headers``."""
        if method == 'GET':
            return params

        if options.post_type != POST_TYPE_JSON:
            # form fields, encoded by the transport
            return params

        headers.update(JSON_HEADERS)
        if not params:
            return None
        if method == 'DELETE':
            # DELETE parameters are passed through unserialized
            return params
        return json.dumps(params)

    def _fetch_from_api(self, method: str, url: str, params: Any, options: CallOptions) -> Any:
        headers = {}
        if not options.public:
            headers = dict(self._build_authentication_headers(method, url, params, headers))

        body = self._prepare_request_body(method, params, options, headers)

        logger.debug("API call %s %s (public=%s)", method, url, options.public)
        response = self.transport.request(url, headers, body, method, {})

        return self._handle_response(response)

    def _handle_response(self, response: Response) -> Any:
        """Decode the response body or raise the error it describes."""
        try:
            payload = json.loads(response.body)
        except (TypeError, ValueError):
            logger.warning("Could not decode response (status %s)", response.status_code)
            raise APIException(UNEXPECTED_RESPONSE_MESSAGE, DEFAULT_ERROR_CODE)

        error_message = self._extract_error_message(payload)
        error_code = DEFAULT_ERROR_CODE

        if BAD_STATUS_MIN <= response.status_code < BAD_STATUS_MAX:
            if error_message is None:
                error_message = f"Received bad status code: {response.status_code}"
            error_code = response.status_code

        if error_message is not None:
            logger.debug("API error %s: %s", error_code, error_message)
            raise APIException(error_message, error_code)

        return payload

    @staticmethod
    def _extract_error_message(payload: Any) -> Any:
        if not payload or not isinstance(payload, dict):
            return None

        if payload.get('error') is not None:
            return payload['error']

        errors = payload.get('errors')
        if errors is None:
            return None
        if payload.get('message') is not None:
            return payload['message']
        if isinstance(errors, dict):
            errors = list(errors.values())
        if isinstance(errors, list):
            return ", ".join(str(e) for e in errors)
        return errors

    def close(self):
        """Close the transport if it holds resources."""
        close = getattr(self.transport, 'close', None)
        if close is not None:
            close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
