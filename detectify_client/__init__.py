"""
Detectify API Client Library

A Python client library that authenticates requests to the Detectify API
with an API key header and, when a secret is configured, an HMAC-SHA256
request signature.

Example usage:
    from detectify_client import DetectifyClient

    client = DetectifyClient("your-api-key", "your-base64-secret")
    response = client.get("/v2/domains/")
"""

from .client import DetectifyClient
from .credentials import Credential, mask_value
from .exceptions import (
    DetectifyClientError,
    ConfigurationError,
    SigningError,
    HTTPError
)
from .signature import (
    SigningContext,
    build_canonical_string,
    calculate_signature,
    compute_signature,
    decode_secret,
    read_request_body,
)
from .transport import SigningTransport
from .constants import (
    HEADER_API_KEY,
    HEADER_TIMESTAMP,
    HEADER_SIGNATURE,
    DEFAULT_BASE_URL,
    DEFAULT_CONFIG,
    ENV_API_KEY,
    ENV_SECRET
)

__version__ = "0.1.0"
__all__ = [
    "DetectifyClient",
    "Credential",
    "SigningTransport",
    "SigningContext",
    "build_canonical_string",
    "calculate_signature",
    "compute_signature",
    "decode_secret",
    "read_request_body",
    "mask_value",
    "DetectifyClientError",
    "ConfigurationError",
    "SigningError",
    "HTTPError",
    "HEADER_API_KEY",
    "HEADER_TIMESTAMP",
    "HEADER_SIGNATURE",
    "DEFAULT_BASE_URL",
    "DEFAULT_CONFIG",
    "ENV_API_KEY",
    "ENV_SECRET"
]
