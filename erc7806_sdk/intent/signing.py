"""
Relay intent hashing, signing and signer recovery.

Two schemes are supported because deployed verifiers differ:

* raw hash: ``keccak256(abi.encode(bytes body, address contract, uint256 chainId))``
  signed as an EIP-191 personal message;
* typed data: the EIP-712 ``Intent`` struct under the
  ``RelayedExecutionStandard`` / ``0.1.0`` domain.
"""
import copy
import logging
from typing import Any, Dict, Optional, Sequence

from eth_abi import encode as abi_encode
from eth_account import Account
from eth_account.messages import encode_defunct, encode_typed_data
from web3 import Web3

from ..exceptions import SigningError
from ..utils import ZERO_ADDRESS, to_checksum

logger = logging.getLogger(__name__)

SIGNATURE_LENGTH = 65

RELAY_DOMAIN_NAME = "RelayedExecutionStandard"
RELAY_DOMAIN_VERSION = "0.1.0"

EIP712_DOMAIN_TYPE = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

INTENT_TYPES = {
    "Intent": [
        {"name": "expiration", "type": "uint64"},
        {"name": "relayer", "type": "address"},
        {"name": "paymentToken", "type": "address"},
        {"name": "paymentAmount", "type": "uint128"},
        {"name": "instructions", "type": "bytes[]"},
    ]
}


def intent_hash(body: bytes, verifying_contract: str, chain_id: int) -> bytes:
    """
    Raw-hash scheme digest of header+instructions bound to contract and chain.

    Returns:
        32-byte keccak256 hash
    """
    encoded = abi_encode(
        ["bytes", "address", "uint256"],
        [bytes(body), to_checksum(verifying_contract), chain_id],
    )
    return bytes(Web3.keccak(encoded))


def create_relay_execution_domain(chain_id: int, verifying_contract: str) -> Dict[str, Any]:
    return {
        "name": RELAY_DOMAIN_NAME,
        "version": RELAY_DOMAIN_VERSION,
        "chainId": chain_id,
        "verifyingContract": to_checksum(verifying_contract),
    }


def build_intent_typed_data(
    chain_id: int,
    verifying_contract: str,
    expiration: int,
    relayer: Optional[str],
    payment_token: str,
    payment_amount: int,
    encoded_actions: Sequence[bytes],
) -> Dict[str, Any]:
    """
    Build the full EIP-712 message for an intent.

    ``instructions`` holds each encoded action separately, not the packed
    instruction block.
    """
    return {
        "types": {"EIP712Domain": EIP712_DOMAIN_TYPE, **INTENT_TYPES},
        "primaryType": "Intent",
        "domain": create_relay_execution_domain(chain_id, verifying_contract),
        "message": {
            "expiration": expiration,
            "relayer": to_checksum(relayer) if relayer else ZERO_ADDRESS,
            "paymentToken": to_checksum(payment_token),
            "paymentAmount": payment_amount,
            "instructions": [bytes(action) for action in encoded_actions],
        },
    }


def typed_data_hash(full_message: Dict[str, Any]) -> bytes:
    """EIP-712 digest (``keccak256(0x1901 | domainSeparator | structHash)``)"""
    signable = encode_typed_data(full_message=copy.deepcopy(full_message))
    return bytes(Web3.keccak(b"\x19" + signable.version + signable.header + signable.body))


def signature_bytes(signed: Any) -> bytes:
    """
    Extract a 65-byte signature from a signer's return value.

    Accepts eth_account ``SignedMessage`` objects, raw bytes or hex strings.

    Raises:
        SigningError: If the result is not a 65-byte signature
    """
    value = getattr(signed, "signature", signed)
    if isinstance(value, str):
        value = Web3.to_bytes(hexstr=value)
    if not isinstance(value, (bytes, bytearray)):
        raise SigningError(f"Signer returned {type(value).__name__}, expected a signature")
    if len(value) != SIGNATURE_LENGTH:
        raise SigningError(f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(value)}")
    return bytes(value)


def sign_intent_hash(signer: Any, digest: bytes) -> bytes:
    """
    Sign a raw-hash scheme digest as a personal message.

    Raises:
        SigningError: If the signer fails
    """
    try:
        signed = signer.sign_message(encode_defunct(primitive=bytes(digest)))
    except Exception as e:
        logger.error(f"Intent signing failed: {e}")
        raise SigningError(f"Failed to sign intent hash: {str(e)}") from e
    return signature_bytes(signed)


def sign_intent_typed_data(signer: Any, full_message: Dict[str, Any]) -> bytes:
    """
    Sign an intent's EIP-712 typed data.

    Raises:
        SigningError: If the signer fails
    """
    message_types = {
        name: fields for name, fields in full_message["types"].items() if name != "EIP712Domain"
    }
    try:
        signed = signer.sign_typed_data(
            full_message["domain"], message_types, full_message["message"]
        )
    except Exception as e:
        logger.error(f"Intent typed-data signing failed: {e}")
        raise SigningError(f"Failed to sign intent typed data: {str(e)}") from e
    return signature_bytes(signed)


def recover_intent_hash_signer(digest: bytes, signature: bytes) -> str:
    """Address that signed a raw-hash scheme digest"""
    return Account.recover_message(encode_defunct(primitive=bytes(digest)), signature=bytes(signature))


def recover_intent_typed_signer(full_message: Dict[str, Any], signature: bytes) -> str:
    """Address that signed an intent's EIP-712 typed data"""
    signable = encode_typed_data(full_message=copy.deepcopy(full_message))
    return Account.recover_message(signable, signature=bytes(signature))
