"""
HMAC request signing.

The API client accepts any object implementing the ``Generator`` protocol.
``HmacGenerator`` signs requests with HMAC-SHA256 over the method, URL,
parameters, API token and nonce, and adds the result as ``X-<ns>-Auth-*``
headers.
"""

import base64
import hashlib
import hmac
import json
import time
from typing import Any, Callable, Dict, Optional, Protocol
from urllib.parse import urlsplit

from .constants import (
    DEFAULT_AUTH_NAMESPACE,
    HEADER_AUTH_API_TOKEN,
    HEADER_AUTH_NONCE,
    HEADER_AUTH_SIGNATURE
)
from .exceptions import ConfigurationError


class Generator(Protocol):
    """Capability producing signed request headers."""

    def add_signature_to_headers(self, method: str, url: str, params: Any,
                                 client_id: Optional[str], client_secret: Optional[str],
                                 headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        ...


def _default_nonce() -> str:
    return str(int(time.time()))


class HmacGenerator:
    """
    HMAC-SHA256 request signer.

    Format: base64(HMAC-SHA256(secret, method + "\\n" + url + "\\n" +
    params_json + "\\n" + api_token + "\\n" + nonce))
    """

    def __init__(self, namespace: str = DEFAULT_AUTH_NAMESPACE,
                 nonce_factory: Optional[Callable[[], str]] = None):
        """
        Initialize generator.

        Args:
            namespace: Header namespace, e.g. "Tokenly" -> X-Tokenly-Auth-Nonce
            nonce_factory: Callable returning a nonce (defaults to unix time)
        """
        if not namespace:
            raise ConfigurationError("namespace cannot be empty")

        self.namespace = namespace
        self.nonce_factory = nonce_factory or _default_nonce

    @property
    def api_token_header(self) -> str:
        return HEADER_AUTH_API_TOKEN.format(namespace=self.namespace)

    @property
    def nonce_header(self) -> str:
        return HEADER_AUTH_NONCE.format(namespace=self.namespace)

    @property
    def signature_header(self) -> str:
        return HEADER_AUTH_SIGNATURE.format(namespace=self.namespace)

    @staticmethod
    def _normalize_url(url: str) -> str:
        """Strip query string and fragment from the signed URL."""
        parts = urlsplit(url)
        return f"{parts.scheme}://{parts.netloc}{parts.path}"

    @staticmethod
    def _encode_params(params: Any) -> str:
        if params and isinstance(params, (dict, list)):
            return json.dumps(params, separators=(',', ':'))
        return '{}'

    def create_signature(self, method: str, url: str, params: Any,
                         api_token: str, secret: str, nonce: str) -> str:
        """
        Generate the request signature.

        Args:
            method: HTTP method
            url: Full request URL
            params: Request parameters
            api_token: Client id sent in the api token header
            secret: Client secret
            nonce: Request nonce

        Returns:
            Base64-encoded HMAC-SHA256 signature
        """
        message = "\n".join([
            method.upper(),
            self._normalize_url(url),
            self._encode_params(params),
            api_token,
            nonce,
        ])
        mac = hmac.new(
            secret.encode('utf-8'),
            message.encode('utf-8'),
            hashlib.sha256
        )
        return base64.b64encode(mac.digest()).decode('ascii')

    def verify_signature(self, method: str, url: str, params: Any, api_token: str,
                         secret: str, nonce: str, signature: str) -> bool:
        """Check a signature using constant-time comparison."""
        expected = self.create_signature(method, url, params, api_token, secret, nonce)
        return hmac.compare_digest(expected, signature)

    def add_signature_to_headers(self, method: str, url: str, params: Any,
                                 client_id: Optional[str], client_secret: Optional[str],
                                 headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """
        Return a copy of ``headers`` with the authentication headers added.

        Raises:
            ConfigurationError: If client id or secret is missing
        """
        if not client_id:
            raise ConfigurationError("client_id is required for signed requests")
        if not client_secret:
            raise ConfigurationError("client_secret is required for signed requests")

        nonce = str(self.nonce_factory())
        signature = self.create_signature(method, url, params, client_id, client_secret, nonce)

        signed = dict(headers or {})
        signed.update({
            self.api_token_header: client_id,
            self.nonce_header: nonce,
            self.signature_header: signature
        })
        return signed
