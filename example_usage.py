#!/usr/bin/env python3
"""
Basic usage examples for the Detectify Python client library.

Credentials are read from DETECTIFY_API_KEY and DETECTIFY_SECRET. Leave
DETECTIFY_SECRET unset to use API-key-only authentication.
"""

import logging
import sys

from detectify_client import DetectifyClient, DetectifyClientError, ConfigurationError, SigningError


def main():
    """Run basic usage examples."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=== Detectify Python Client Basic Usage Examples ===\n")

    # Create client from the environment
    print("1. Creating Detectify client...")
    try:
        client = DetectifyClient.from_env()
    except ConfigurationError as e:
        print(f"   ✗ Configuration error: {e}")
        sys.exit(1)
    print(f"   Client created for: {client.base_url}")
    print(f"   Credential: {client.credential!r}")
    print(f"   HMAC signing: {'enabled' if client.credential.signing_enabled else 'disabled'}\n")

    try:
        with client:
            # Example 1: List domains
            print("2. Listing domains...")
            response = client.get("/v2/domains/")
            if response.status_code == 200:
                print(f"   ✓ GET request successful ({len(response.json())} domains)")
            elif response.status_code in (401, 403):
                print(f"   ✗ Authentication rejected: {response.status_code}")
            else:
                print(f"   ✗ GET request failed: {response.status_code}")
                print(f"   Response: {response.text}")
            print()

    except SigningError as e:
        print(f"Signing Error (check DETECTIFY_SECRET): {e}")
        sys.exit(1)
    except DetectifyClientError as e:
        print(f"Detectify Client Error: {e}")
        sys.exit(1)

    print("=== All Examples Completed ===")


if __name__ == "__main__":
    main()
