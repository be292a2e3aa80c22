"""
Detectify API client.

Wraps a ``requests.Session`` whose transport signs every request sent to the
API base URL with the configured credential.
"""

import logging
import os
from typing import Any, Callable, Mapping, Optional
from urllib.parse import urljoin, urlsplit

import requests
from requests.adapters import BaseAdapter

from .constants import (
    DEFAULT_BASE_URL,
    DEFAULT_CONFIG,
    ENV_API_KEY,
    ENV_SECRET,
    HEADER_API_KEY,
    HEADER_SIGNATURE,
    HEADER_TIMESTAMP,
)
from .credentials import Credential, mask_value
from .exceptions import ConfigurationError, HTTPError
from .transport import SigningTransport

logger = logging.getLogger(__name__)

AUTH_HEADERS = (HEADER_API_KEY, HEADER_TIMESTAMP, HEADER_SIGNATURE)


class DetectifySession(requests.Session):
    """
    Session that drops Detectify credentials when following redirects.

    The signing transport is mounted for the API base URL only, so a
    redirect that stays on the API is signed again with fresh headers and
    one that leaves it goes out without credentials.
    """

    def rebuild_auth(self, prepared_request, response):
        for name in AUTH_HEADERS:
            prepared_request.headers.pop(name, None)
        super().rebuild_auth(prepared_request, response)


def _is_valid_timeout(value) -> bool:
    """Accept a positive number or a requests (connect, read) pair."""
    if isinstance(value, tuple):
        return len(value) == 2 and all(v is None or _is_valid_timeout(v) for v in value)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return value > 0


class DetectifyClient:
    """
    Client for making authenticated requests to the Detectify API.

    Requests always carry the API key header. When a secret is configured
    they are also HMAC-signed with a timestamp and signature header.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        sender: Optional[BaseAdapter] = None,
        clock: Optional[Callable[[], float]] = None,
        **config,
    ):
        """
        Initialize Detectify client.

        Credentials left as None are read from the DETECTIFY_API_KEY and
        DETECTIFY_SECRET environment variables.

        Args:
            api_key: Detectify API key
            secret_key: Base64-encoded HMAC secret; empty disables signing
            base_url: Base URL for HTTP requests
            sender: Adapter performing the network call (default: HTTPAdapter)
            clock: Time source for signatures (default: time.time)
            **config: Configuration options (timeout)

        Raises:
            ConfigurationError: If the credential or options are invalid
        """
        logger.info("Configuring Detectify client")

        if api_key is None:
            api_key = os.environ.get(ENV_API_KEY, "")
        if secret_key is None:
            secret_key = os.environ.get(ENV_SECRET, "")

        self.base_url = base_url.rstrip('/')

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}
        self._validate_config()

        self.credential = Credential(api_key, secret_key)

        transport_kwargs = {}
        if clock is not None:
            transport_kwargs['clock'] = clock
        self.transport = SigningTransport(self.credential, sender=sender, **transport_kwargs)

        # Other hosts keep the session's default, unsigned adapters
        self.session = DetectifySession()
        self.session.mount(self.base_url + '/', self.transport)

        logger.debug(
            "Configured Detectify client for %s (api_key=%s, signing=%s)",
            self.base_url,
            mask_value(api_key),
            self.credential.signing_enabled,
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **kwargs) -> 'DetectifyClient':
        """
        Create a client with credentials taken only from the environment.

        Args:
            environ: Mapping to read instead of os.environ
            **kwargs: Other DetectifyClient arguments

        Returns:
            Configured client
        """
        env = os.environ if environ is None else environ
        return cls(
            api_key=env.get(ENV_API_KEY, ""),
            secret_key=env.get(ENV_SECRET, ""),
            **kwargs,
        )

    def _validate_config(self):
        """Validate client configuration."""
        unknown = set(self.config) - set(DEFAULT_CONFIG)
        if unknown:
            raise ConfigurationError(f"unknown configuration options: {', '.join(sorted(unknown))}")

        timeout = self.config['timeout']
        if timeout is not None and not _is_valid_timeout(timeout):
            raise ConfigurationError(
                f"timeout must be a positive number or a (connect, read) pair, got {timeout!r}"
            )

    def request(self, method: str, path: str, **kwargs) -> requests.Response:
        """
        Make authenticated HTTP request.

        Args:
            method: HTTP method
            path: URL path (relative to base_url)
            **kwargs: Additional requests arguments

        Returns:
            requests.Response object

        Raises:
            ConfigurationError: If path is an absolute URL
            SigningError: If the request could not be signed
            HTTPError: If the request fails in transit
        """
        parts = urlsplit(path)
        if parts.scheme or parts.netloc:
            raise ConfigurationError(f"path must be relative to {self.base_url}, got {path!r}")

        url = urljoin(self.base_url + '/', path.lstrip('/'))
        kwargs.setdefault('timeout', self.config['timeout'])

        try:
            return self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise HTTPError(f"HTTP request failed: {e}") from e

    def get(self, path: str, **kwargs) -> requests.Response:
        """Make authenticated GET request."""
        return self.request('GET', path, **kwargs)

    def post(self, path: str, json: Any = None, data: Any = None, **kwargs) -> requests.Response:
        """Make authenticated POST request."""
        return self.request('POST', path, json=json, data=data, **kwargs)

    def put(self, path: str, json: Any = None, data: Any = None, **kwargs) -> requests.Response:
        """Make authenticated PUT request."""
        return self.request('PUT', path, json=json, data=data, **kwargs)

    def patch(self, path: str, json: Any = None, data: Any = None, **kwargs) -> requests.Response:
        """Make authenticated PATCH request."""
        return self.request('PATCH', path, json=json, data=data, **kwargs)

    def delete(self, path: str, **kwargs) -> requests.Response:
        """Make authenticated DELETE request."""
        return self.request('DELETE', path, **kwargs)

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
