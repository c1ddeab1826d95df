#!/usr/bin/env python3
"""
Basic usage examples for the Dragonchain SDK.

This script demonstrates how to use the SDK to make authenticated requests
to a Dragonchain. The chain and credentials come from the usual places:
DRAGONCHAIN_ID / DRAGONCHAIN_ENDPOINT / AUTH_KEY / AUTH_KEY_ID, or the
~/.dragonchain/credentials file.
"""

import sys

from dragonchain_sdk import (
    Credentials,
    DragonchainClient,
    DragonchainError,
    HmacAlgorithm,
    set_stream_logger,
)
from dragonchain_sdk.signing import get_authorization_header


def main():
    """Run basic usage examples."""

    print("=== Dragonchain SDK Basic Usage Examples ===\n")

    # Example 1: Signing without a chain
    print("1. Computing a DC1 authorization header offline...")
    credentials = Credentials(auth_key="key", auth_key_id="keyId")
    header = get_authorization_header(
        credentials, "POST", "/new_path", "testId", "timestamp", "application/json", '"body"'
    )
    print(f"   Credentials: {credentials}")
    print(f"   Authorization: {header}\n")

    # Create client
    print("2. Creating Dragonchain client...")
    try:
        client = DragonchainClient()
    except DragonchainError as e:
        print(f"   ✗ Could not configure client: {e}")
        print("   Set DRAGONCHAIN_ID, AUTH_KEY and AUTH_KEY_ID, or write ~/.dragonchain/credentials")
        sys.exit(1)
    print(f"   Dragonchain: {client.identity.id}")
    print(f"   Endpoint: {client.identity.endpoint}\n")

    try:
        # Example 3: Chain status
        print("3. Getting chain status...")
        response = client.get_status()
        if response["ok"]:
            print(f"   ✓ Status: level {response['response'].get('level')}")
        else:
            print(f"   ✗ Status request failed: {response['status']}")
            print(f"   Response: {response['response']}")
        print()

        # Example 4: Transaction types and transactions
        print("4. Registering a transaction type and posting to it...")
        response = client.create_transaction_type(
            "banana", [{"path": "$.color", "field_name": "color", "type": "text"}]
        )
        print(f"   Transaction type: {response['status']}")

        response = client.create_transaction("banana", {"color": "yellow"}, tag="fruit")
        if response["ok"]:
            print(f"   ✓ Transaction id: {response['response']['transaction_id']}")
        else:
            print(f"   ✗ Create transaction failed: {response['status']}")
        print()

        # Example 5: Searching
        print("5. Querying transactions...")
        response = client.query_transactions("tag:fruit", sort="timestamp:desc", limit=5)
        if response["ok"]:
            print(f"   ✓ Found {response['response'].get('total', 0)} transactions")
        else:
            print(f"   ✗ Query failed: {response['status']}")
        print()

        # Example 6: Error statuses are returned, not raised
        print("6. Demonstrating error handling...")
        response = client.get_block("no-such-block")
        print(f"   Missing block returned status {response['status']}")
        try:
            client.get_verifications("no-such-block", level=9)
        except DragonchainError as e:
            print(f"   ✓ Rejected before sending: {e.code} {e}")
        print()

        print("=== All Examples Completed Successfully! ===")

    except DragonchainError as e:
        print(f"Dragonchain Error: {e}")
        sys.exit(1)
    finally:
        client.close()


def demonstrate_context_manager():
    """Demonstrate using the client as a context manager."""

    print("\n=== Context Manager Usage Example ===")

    try:
        with DragonchainClient() as client:
            response = client.list_transaction_types()
            print(f"✓ Transaction types: {response['status']}")
        print("✓ Client automatically closed")
    except DragonchainError as e:
        print(f"Context manager error: {e}")


def demonstrate_configuration():
    """Demonstrate client configuration options."""

    print("\n=== Configuration Options Example ===")

    client = DragonchainClient(
        "testId",
        "https://localhost:8080",
        auth_key="key",
        auth_key_id="keyId",
        algorithm=HmacAlgorithm.BLAKE2B512.value,
        verify=False,            # self-signed development node
        timeout=60               # 60 second HTTP timeout
    )

    print("✓ Client configured with:")
    print(f"  - Algorithm: {client.algorithm.value}")
    print(f"  - Verify TLS: {client.verify}")
    print(f"  - HTTP timeout: {client.config['timeout']} seconds")

    client.close()


if __name__ == "__main__":
    set_stream_logger(level="DEBUG")

    demonstrate_configuration()
    main()
    demonstrate_context_manager()
