"""
EIP-712 permits for the StandardRegistry.

A signed ``Permission`` lets anyone (un)register a standard for the signer
through ``StandardRegistry.permit`` without the signer paying gas.
"""
import copy
import logging
from typing import Any, Dict

from eth_account import Account
from eth_account.messages import encode_typed_data

from .exceptions import SigningError
from .intent.signing import signature_bytes, typed_data_hash
from .models import SigningResult, StandardRegistryDomain, StandardRegistryPermission
from .utils import current_timestamp_ms, to_bytes, to_hex

logger = logging.getLogger(__name__)

STANDARD_REGISTRY_NAME = "StandardRegistry"
STANDARD_REGISTRY_VERSION = "2"

STANDARD_REGISTRY_TYPES = {
    "EIP712Domain": [
        {"name": "name", "type": "string"},
        {"name": "version", "type": "string"},
        {"name": "chainId", "type": "uint256"},
        {"name": "verifyingContract", "type": "address"},
    ],
    "Permission": [
        {"name": "registering", "type": "bool"},
        {"name": "standard", "type": "address"},
        {"name": "nonce", "type": "uint256"},
    ],
}


def create_standard_registry_domain(contract_address: str, chain_id: int) -> StandardRegistryDomain:
    """EIP-712 domain of the StandardRegistry at ``contract_address``"""
    return StandardRegistryDomain(
        name=STANDARD_REGISTRY_NAME,
        version=STANDARD_REGISTRY_VERSION,
        chain_id=chain_id,
        verifying_contract=contract_address,
    )


def generate_nonce() -> int:
    """
    Millisecond timestamp usable as a permit nonce.

    The registry rejects reused nonces; callers issuing several permits
    within the same millisecond must pick their own.
    """
    return current_timestamp_ms()


def build_permission_typed_data(
    contract_address: str,
    chain_id: int,
    registering: bool,
    standard: str,
    nonce: int,
) -> Dict[str, Any]:
    """Full EIP-712 message for a Permission"""
    domain = create_standard_registry_domain(contract_address, chain_id)
    permission = StandardRegistryPermission(registering=registering, standard=standard, nonce=nonce)
    return {
        "types": copy.deepcopy(STANDARD_REGISTRY_TYPES),
        "primaryType": "Permission",
        "domain": domain.to_eip712(),
        "message": permission.model_dump(),
    }


def get_standard_registry_typed_data_hash(
    contract_address: str,
    chain_id: int,
    registering: bool,
    standard: str,
    nonce: int,
) -> str:
    """
    EIP-712 hash of a Permission, as a 0x-prefixed hex string.

    This is the digest the registry contract recovers the signer from.
    """
    return to_hex(typed_data_hash(
        build_permission_typed_data(contract_address, chain_id, registering, standard, nonce)
    ))


def sign_standard_registry_permission(
    signer: Any,
    contract_address: str,
    chain_id: int,
    registering: bool,
    standard: str,
    nonce: int,
) -> SigningResult:
    """
    Sign a Permission with the signer's EIP-712 capability.

    Returns:
        SigningResult with the 0x-prefixed signature and signer address

    Raises:
        SigningError: If the signer fails
    """
    full_message = build_permission_typed_data(contract_address, chain_id, registering, standard, nonce)
    message_types = {"Permission": full_message["types"]["Permission"]}
    try:
        signed = signer.sign_typed_data(full_message["domain"], message_types, full_message["message"])
    except Exception as e:
        logger.error(f"Permission signing failed: {e}")
        raise SigningError(f"Failed to sign StandardRegistry permission: {str(e)}") from e

    signature = signature_bytes(signed)
    logger.debug(f"Signed {'register' if registering else 'unregister'} permission for {standard}")
    return SigningResult(signature=to_hex(signature), signer_address=signer.address)


def recover_standard_registry_signer(
    contract_address: str,
    chain_id: int,
    registering: bool,
    standard: str,
    nonce: int,
    signature: Any,
) -> str:
    """
    Recover the address that signed a Permission.

    Raises:
        SigningError: If the signature is malformed
    """
    signable = encode_typed_data(
        full_message=build_permission_typed_data(contract_address, chain_id, registering, standard, nonce)
    )
    try:
        return Account.recover_message(signable, signature=to_bytes(signature))
    except Exception as e:
        raise SigningError(f"Cannot recover permission signer: {str(e)}") from e


class StandardRegistrySDK:
    """Permit helpers bound to one StandardRegistry deployment"""

    def __init__(self, contract_address: str, chain_id: int):
        self.contract_address = contract_address
        self.chain_id = chain_id

    def get_domain(self) -> StandardRegistryDomain:
        return create_standard_registry_domain(self.contract_address, self.chain_id)

    def get_typed_data_hash(self, registering: bool, standard: str, nonce: int) -> str:
        return get_standard_registry_typed_data_hash(
            self.contract_address, self.chain_id, registering, standard, nonce
        )

    def sign_permission(self, signer: Any, registering: bool, standard: str, nonce: int) -> SigningResult:
        return sign_standard_registry_permission(
            signer, self.contract_address, self.chain_id, registering, standard, nonce
        )

    def recover_signer(self, registering: bool, standard: str, nonce: int, signature: Any) -> str:
        return recover_standard_registry_signer(
            self.contract_address, self.chain_id, registering, standard, nonce, signature
        )
