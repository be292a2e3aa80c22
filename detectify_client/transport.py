"""
Signing transport for requests sessions.

SigningTransport is mounted on a ``requests.Session`` and intercepts every
prepared request before it reaches the network. It attaches the API key
header, and when a secret is configured, a fresh timestamp and HMAC
signature, then hands the request to the wrapped sender.
"""

import logging
import time
from typing import Callable, Dict, Optional
from urllib.parse import urlsplit

from requests.adapters import BaseAdapter, HTTPAdapter

from .constants import HEADER_API_KEY, HEADER_SIGNATURE, HEADER_TIMESTAMP
from .credentials import Credential
from .exceptions import SigningError
from .signature import calculate_signature, unix_seconds

logger = logging.getLogger(__name__)


class SigningTransport(BaseAdapter):
    """
    Transport adapter that signs requests before delegating them.

    The adapter holds no per-request state: the credential and the static
    header template are never modified after construction, and each call to
    ``send`` builds its own header set. One instance can be shared by
    threads issuing requests concurrently.
    """

    def __init__(
        self,
        credential: Credential,
        sender: Optional[BaseAdapter] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize signing transport.

        Args:
            credential: API key and optional secret
            sender: Adapter that performs the network call (default: HTTPAdapter)
            clock: Returns the current time as Unix seconds
        """
        super().__init__()
        self.credential = credential
        self.sender = sender if sender is not None else HTTPAdapter()
        self.clock = clock
        self._static_headers = {HEADER_API_KEY: credential.api_key}

    def build_headers(self, request) -> Dict[str, str]:
        """
        Build the authentication headers for one request.

        Reads and buffers the request body when signing is enabled.

        Raises:
            SigningError: If the request cannot be signed
        """
        headers = dict(self._static_headers)

        if self.credential.signing_enabled:
            timestamp = unix_seconds(self.clock())
            headers[HEADER_SIGNATURE] = calculate_signature(
                request,
                self.credential.api_key,
                self.credential.secret_key,
                timestamp,
            )
            headers[HEADER_TIMESTAMP] = str(timestamp)
            logger.debug("Signed %s %s at %s", request.method, urlsplit(request.url).path, timestamp)

        return headers

    def send(self, request, **kwargs):
        """
        Sign and send a prepared request.

        Args:
            request: ``requests.PreparedRequest`` to send
            **kwargs: Passed to the sender unchanged (stream, timeout, ...)

        Returns:
            The sender's response

        Raises:
            SigningError: If signing fails; nothing is sent
        """
        try:
            headers = self.build_headers(request)
        except SigningError as e:
            logger.error(
                "Request signing failed, not sending %s %s: %s",
                request.method,
                urlsplit(request.url).path,
                e,
            )
            raise

        if not self.credential.signing_enabled:
            request.headers.pop(HEADER_TIMESTAMP, None)
            request.headers.pop(HEADER_SIGNATURE, None)

        request.headers.update(headers)

        return self.sender.send(request, **kwargs)

    def close(self):
        """Close the wrapped sender."""
        self.sender.close()
