#!/usr/bin/env python3
"""
Basic usage examples for EdgeGrid Python client library.

This script demonstrates how to sign requests to an Akamai OPEN API host
using credentials from ~/.edgerc or AKAMAI_* environment variables.
"""

import logging
import sys

import requests

from edgegrid_client import (
    EdgeGridAuth,
    EdgeGridClient,
    EdgeGridError,
    RequestDescriptor,
    resolve_credentials,
    sign_request
)


def main():
    """Run basic usage examples."""

    section = sys.argv[1] if len(sys.argv) > 1 else "default"
    logging.basicConfig(level=logging.DEBUG if "-v" in sys.argv else logging.INFO)

    print("=== EdgeGrid Python Client Basic Usage Examples ===\n")

    # Resolve credentials
    print("1. Resolving credentials...")
    try:
        credentials = resolve_credentials(section)
    except EdgeGridError as e:
        print(f"   ✗ Could not load credentials for [{section}]: {e}")
        return 1
    print(f"   Host: {credentials.host}")
    print(f"   Client token: {credentials.client_token[:10]}...\n")

    # Example 1: Compute a header without sending anything
    print("2. Signing a request description...")
    request = RequestDescriptor(method="GET", path="/billing-usage/v1/reportSources")
    header = sign_request(credentials, request)
    print(f"   Authorization: {header[:60]}...\n")

    # Example 2: Use the auth handler with a plain requests session
    print("3. Using EdgeGridAuth with requests...")
    session = requests.Session()
    session.auth = EdgeGridAuth(credentials)
    try:
        response = session.get(f"{credentials.base_url}/identity-management/v3/user-profile")
        print(f"   Status: {response.status_code}\n")
    except requests.RequestException as e:
        print(f"   ✗ Request error: {e}\n")
    finally:
        session.close()

    # Example 3: Use the client wrapper
    print("4. Using EdgeGridClient...")
    with EdgeGridClient(credentials, headers_to_sign=["Content-Type"]) as client:
        try:
            response = client.get("/papi/v1/groups")
            print(f"   GET /papi/v1/groups: {response.status_code}")

            response = client.post(
                "/papi/v1/search/find-by-value",
                json={"propertyName": "www.example.com"}
            )
            print(f"   POST /papi/v1/search/find-by-value: {response.status_code}")
        except EdgeGridError as e:
            print(f"   ✗ Request error: {e}")

    print("\n=== Examples completed ===")
    return 0


if __name__ == "__main__":
    sys.exit(main())
