#!/usr/bin/env python3
"""
Simple example of using the ERC-7806 SDK.
"""
import os

from erc7806_sdk import (
    IntentScheme,
    LocalSigner,
    NetworkConfig,
    RelayApiClient,
    build_relay_execution_intent,
    verify_relay_execution_intent,
)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def main():
    """
    Demonstrate building and submitting a relay intent.

    This example shows how to:
    1. Look up the relay contract for a network
    2. Build and sign an intent paying the relayer in ETH
    3. Submit it to the relay service and check its status
    """
    # Read configuration from environment
    NETWORK = os.environ.get("NETWORK", "ETH_SEPOLIA")
    PRIVATE_KEY = os.environ.get("PRIVATE_KEY")
    RECEIVER = os.environ.get("RECEIVER", "0x1234567890123456789012345678901234567890")
    SCHEME = os.environ.get("INTENT_SCHEME", IntentScheme.RAW_HASH.value)

    if not PRIVATE_KEY:
        print("ERROR: PRIVATE_KEY environment variable is required")
        return

    network = NetworkConfig.get_network(NETWORK)
    signer = LocalSigner(PRIVATE_KEY)

    actions = [
        {"type": "TRANSFER_ETH", "receiver": RECEIVER, "amount": 10**12},
    ]

    intent = build_relay_execution_intent(
        chain_id=network.chain_id,
        relay_execution_standard_address=NetworkConfig.get_relay_execution_standard_address(NETWORK),
        payment_token_address=ZERO_ADDRESS,  # pay the relayer in ETH
        payment_token_amount=10**13,
        actions=actions,
        expiration=10,
        signer=signer,
        scheme=IntentScheme(SCHEME),
    )
    print(f"Intent ({len(intent)} bytes): 0x{intent.hex()}")
    print(f"Verifies locally: {verify_relay_execution_intent(intent, network.chain_id, SCHEME)}")

    try:
        api = RelayApiClient()
        created = api.create_relay(network.symbol, intent)
        print(f"Relay request {created.request_id}: {created.status}")

        relay = api.get_relay(created.request_id)
        print(f"State: {relay.state}")
        if relay.transaction_hash:
            print(f"Transaction: {network.explorer}/tx/{relay.transaction_hash}")

    except Exception as e:
        print(f"Error submitting intent: {str(e)}")


if __name__ == "__main__":
    main()
