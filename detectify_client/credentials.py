"""
API credentials for the Detectify client.
"""

from typing import Optional

from .exceptions import ConfigurationError, SigningError
from .signature import decode_secret


def mask_value(value: Optional[str], visible: int = 4) -> str:
    """Mask a sensitive value for logging, keeping a short prefix."""
    if not value:
        return ""
    return value[:visible] + "****"


class Credential:
    """
    API key and optional HMAC secret.

    The secret is validated when the credential is created, so a credential
    that exists can always sign. An empty or missing secret selects
    API-key-only authentication.
    """

    __slots__ = ('_api_key', '_secret_key')

    def __init__(self, api_key: str, secret_key: Optional[str] = None):
        if not api_key:
            raise ConfigurationError(
                "api_key cannot be empty. Pass it explicitly or set the "
                "DETECTIFY_API_KEY environment variable."
            )

        if secret_key:
            try:
                decode_secret(secret_key)
            except SigningError as e:
                raise ConfigurationError(f"invalid secret: {e}") from e

        self._api_key = api_key
        self._secret_key = secret_key or None

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def secret_key(self) -> Optional[str]:
        return self._secret_key

    @property
    def signing_enabled(self) -> bool:
        """True when requests carry a timestamp and HMAC signature."""
        return self._secret_key is not None

    def __repr__(self):
        return (
            f"Credential(api_key={mask_value(self._api_key)!r}, "
            f"secret_key={mask_value(self._secret_key)!r})"
        )
