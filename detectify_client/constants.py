"""
Constants for the Detectify API client.
"""

# HTTP Headers
HEADER_API_KEY = "X-Detectify-Key"
HEADER_TIMESTAMP = "X-Detectify-Timestamp"
HEADER_SIGNATURE = "X-Detectify-Signature"

# Environment variables read by DetectifyClient.from_env() and as defaults
ENV_API_KEY = "DETECTIFY_API_KEY"
ENV_SECRET = "DETECTIFY_SECRET"

DEFAULT_BASE_URL = "https://api.detectify.com/rest"

# Default configuration values
DEFAULT_CONFIG = {
    'timeout': 30,              # HTTP timeout in seconds
}

# Canonical string delimiter
SIGNATURE_DELIMITER = b";"
