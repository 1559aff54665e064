#!/usr/bin/env python3
"""
Basic usage examples for the Tokenly API client library.

Configure the target API with environment variables before running:

    TOKENLY_API_BASE_URL=https://api.example.com/api/v1
    TOKENLY_API_CLIENT_ID=client1
    TOKENLY_API_CLIENT_SECRET=...
"""

import json
import logging
import sys

import requests

from tokenly_api import APIClient, APIClientError, APIException, CallOptions, HmacGenerator


def main():
    """Run basic usage examples."""

    logging.basicConfig(level=logging.INFO)

    print("=== Tokenly API Client Basic Usage Examples ===\n")

    # Create client
    print("1. Creating API client...")
    try:
        client = APIClient.from_env(HmacGenerator())
    except APIClientError as e:
        print(f"   ✗ {e}")
        return 1
    print(f"   Client created for: {client.api_base_url}")
    print(f"   Client id: {client.client_id}\n")

    with client:
        try:
            # Example 1: Public endpoint (no signature headers)
            print("2. Calling public endpoint...")
            status = client.get_public("status", {})
            print(f"   ✓ {json.dumps(status)}\n")

            # Example 2: Signed GET
            print("3. Calling signed GET endpoint...")
            profile = client.get("users/me", {})
            print(f"   ✓ {json.dumps(profile)}\n")

            # Example 3: Signed POST with JSON body
            print("4. Calling signed POST endpoint (JSON)...")
            created = client.post("items", {"name": "widget", "qty": 3})
            print(f"   ✓ {json.dumps(created)}\n")

            # Example 4: Signed PUT with form body
            print("5. Calling signed PUT endpoint (form)...")
            updated = client.call('PUT', "items/1", {"qty": 4}, CallOptions(post_type='form'))
            print(f"   ✓ {json.dumps(updated)}\n")

        except APIException as e:
            print(f"   ✗ API error {e.code}: {e.message}")
            return 1
        except requests.RequestException as e:
            print(f"   ✗ HTTP request failed: {e}")
            return 1

    print("=== Examples completed ===")
    return 0


if __name__ == "__main__":
    sys.exit(main())
