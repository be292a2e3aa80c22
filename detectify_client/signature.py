"""
HMAC-SHA256 request signatures for the Detectify API.

The signed value is the canonical string

    METHOD;PATH;APIKEY;UNIX_TIMESTAMP;BODY

keyed by the base64-decoded secret, and the signature is the base64 encoding
of the raw digest. The server builds the same string from the received
request, so every part must match byte for byte.
"""

import base64
import binascii
import datetime
import hashlib
import hmac
from typing import Any, NamedTuple, Union
from urllib.parse import urlsplit

from .constants import SIGNATURE_DELIMITER
from .exceptions import SigningError


Timestamp = Union[datetime.datetime, int, float]


class SigningContext(NamedTuple):
    """Request fields covered by a signature."""

    method: str
    path: str
    api_key: str
    timestamp: int
    body: bytes


def unix_seconds(timestamp: Timestamp) -> int:
    """Truncate a datetime or epoch value to whole Unix seconds."""
    if isinstance(timestamp, datetime.datetime):
        return int(timestamp.timestamp())
    return int(timestamp)


def decode_secret(secret_key: str) -> bytes:
    """
    Decode a base64 secret into HMAC key material.

    Args:
        secret_key: Standard base64 string, padding included

    Returns:
        Raw key bytes

    Raises:
        SigningError: If the secret is empty or not valid base64
    """
    if not secret_key:
        raise SigningError("secret key is empty")

    try:
        key = base64.b64decode(secret_key, validate=True)
    except (binascii.Error, ValueError) as e:
        raise SigningError(f"secret key is not valid base64: {e}") from e

    if not key:
        raise SigningError("secret key decodes to zero bytes")
    return key


def build_canonical_string(context: SigningContext) -> bytes:
    """
    Build the byte string that gets signed.

    Text fields are UTF-8 encoded; the body is appended as-is so binary
    payloads are covered exactly.
    """
    return SIGNATURE_DELIMITER.join([
        context.method.encode('utf-8'),
        context.path.encode('utf-8'),
        context.api_key.encode('utf-8'),
        str(context.timestamp).encode('ascii'),
        context.body,
    ])


def compute_signature(context: SigningContext, secret_key: str) -> str:
    """
    Compute the base64 HMAC-SHA256 signature for a signing context.

    Args:
        context: Request fields to sign
        secret_key: Base64-encoded secret

    Returns:
        Base64-encoded signature (standard alphabet, padded)

    Raises:
        SigningError: If the secret cannot be decoded
    """
    key = decode_secret(secret_key)
    mac = hmac.new(key, build_canonical_string(context), hashlib.sha256)
    return base64.b64encode(mac.digest()).decode('ascii')


def _set_buffered_body(request: Any, body: bytes):
    request.body = body
    headers = getattr(request, 'headers', None)
    if headers is None:
        return
    # The sender must transmit exactly the signed bytes with a fixed length
    headers['Content-Length'] = str(len(body))
    headers.pop('Transfer-Encoding', None)


def read_request_body(request: Any) -> bytes:
    """
    Return the bytes of a request body, buffering it on the request.

    Bodies that can only be read once (file objects, generators) are read
    fully and replaced on the request by the buffered bytes, so the body
    that is eventually sent is the body that was signed. Text bodies are
    replaced by their UTF-8 encoding for the same reason.

    Args:
        request: Object with a mutable ``body`` attribute, typically a
            ``requests.PreparedRequest``

    Returns:
        Body bytes (empty when the request has no body)

    Raises:
        SigningError: If the body cannot be read
    """
    body = getattr(request, 'body', None)

    if body is None:
        return b''
    if isinstance(body, bytes):
        return body
    if isinstance(body, bytearray):
        buffered = bytes(body)
    elif isinstance(body, str):
        buffered = body.encode('utf-8')
    else:
        try:
            if hasattr(body, 'read'):
                chunks = [body.read()]
            else:
                chunks = list(body)
        except (OSError, TypeError, ValueError) as e:
            raise SigningError(f"request body could not be read for signing: {e}") from e

        buffered = b''.join(
            c.encode('utf-8') if isinstance(c, str) else bytes(c)
            for c in chunks if c
        )

    _set_buffered_body(request, buffered)
    return buffered


def calculate_signature(request: Any, api_key: str, secret_key: str, timestamp: Timestamp) -> str:
    """
    Calculate the HMAC signature for a request.

    Args:
        request: Object exposing ``method``, ``url`` and ``body``
        api_key: API key sent in the credential header
        secret_key: Base64-encoded secret
        timestamp: Signing time, truncated to whole seconds

    Returns:
        Base64-encoded signature

    Raises:
        SigningError: If the secret is invalid or the body unreadable
    """
    context = SigningContext(
        method=request.method,
        path=urlsplit(request.url).path,
        api_key=api_key,
        timestamp=unix_seconds(timestamp),
        body=read_request_body(request),
    )
    return compute_signature(context, secret_key)
