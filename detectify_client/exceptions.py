"""
Custom exceptions for the Detectify API client.
"""


class DetectifyClientError(Exception):
    """Base exception for Detectify client errors."""
    pass


class ConfigurationError(DetectifyClientError):
    """Raised when client configuration or credentials are invalid."""
    pass


class SigningError(DetectifyClientError):
    """Raised when a request cannot be signed; the request is not sent."""
    pass


class HTTPError(DetectifyClientError):
    """Raised when HTTP request fails."""
    pass
