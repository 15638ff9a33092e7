#!/usr/bin/env python3
"""
Example: register a standard for an account with a signed permit.

The account owner signs the Permission off-chain; any funded account can
then submit it to the StandardRegistry.
"""
import os
import logging

from erc7806_sdk import (
    LocalSigner,
    NetworkConfig,
    StandardRegistryClient,
    StandardRegistrySDK,
    generate_nonce,
)

logging.basicConfig(level=logging.INFO)


def main():
    NETWORK = os.environ.get("NETWORK", "ETH_SEPOLIA")
    OWNER_KEY = os.environ.get("OWNER_PRIVATE_KEY")
    SUBMITTER_KEY = os.environ.get("SUBMITTER_PRIVATE_KEY")

    if not OWNER_KEY or not SUBMITTER_KEY:
        print("ERROR: OWNER_PRIVATE_KEY and SUBMITTER_PRIVATE_KEY are required")
        return

    chain_id = NetworkConfig.get_chain_id(NETWORK)
    registry_address = NetworkConfig.get_standard_registry_address(NETWORK)
    standard = NetworkConfig.get_relay_execution_standard_address(NETWORK)

    owner = LocalSigner(OWNER_KEY)
    sdk = StandardRegistrySDK(registry_address, chain_id)
    nonce = generate_nonce()

    print(f"Permission hash: {sdk.get_typed_data_hash(True, standard, nonce)}")
    permit = sdk.sign_permission(owner, True, standard, nonce)
    assert sdk.recover_signer(True, standard, nonce, permit.signature) == owner.address

    client = StandardRegistryClient.from_network(NETWORK, signer=LocalSigner(SUBMITTER_KEY))
    result = client.permit(True, owner.address, standard, nonce, permit.signature)
    if not result.success:
        print(f"Permit failed: {result.error}")
        return
    print(f"Permit sent: {result.transaction_hash}")

    status = client.is_registered(owner.address, standard)
    print(f"Registered: {status.is_registered}")


if __name__ == "__main__":
    main()
