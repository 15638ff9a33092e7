"""
Relay intent headers.
"""
import time
from typing import Optional, Tuple

from eth_abi.packed import encode_packed

from ..exceptions import EncodingInvariantViolation
from ..utils import UINT64_MAX, UINT128_MAX, ZERO_ADDRESS, is_zero_address, require_uint, to_checksum

EXPIRATION_SIZE = 8
HEADER_LENGTH = EXPIRATION_SIZE
HEADER_WITH_RELAYER_LENGTH = EXPIRATION_SIZE + 20
TYPED_HEADER_LENGTH = EXPIRATION_SIZE + 20 + 20 + 16


def expiration_timestamp(expiration_minutes: int) -> int:
    """Absolute unix timestamp ``expiration_minutes`` from now"""
    timestamp = int(time.time()) + expiration_minutes * 60
    return require_uint("expiration", timestamp, UINT64_MAX)


def is_relayer_assigned(relayer: Optional[str]) -> bool:
    return bool(relayer) and not is_zero_address(relayer)


def build_header(expiration_minutes: int, relayer: Optional[str] = None) -> bytes:
    """
    Build the raw-hash scheme header.

    The relayer slot is omitted, not zero-filled, when no relayer (or the
    zero address) is given, so the header is 8 or 28 bytes long.

    Args:
        expiration_minutes: Minutes from now until the intent expires
        relayer: Address allowed to submit the intent, if any

    Returns:
        ``uint64 expiration [| address relayer]``
    """
    timestamp = expiration_timestamp(expiration_minutes)
    if is_relayer_assigned(relayer):
        return encode_packed(["uint64", "address"], [timestamp, to_checksum(relayer)])
    return encode_packed(["uint64"], [timestamp])


def build_typed_header(
    expiration: int,
    relayer: Optional[str],
    payment_token: str,
    payment_amount: int,
) -> bytes:
    """
    Build the 64-byte typed-data scheme header.

    ``uint64 expiration | address relayer | address paymentToken | uint128 paymentAmount``
    with the zero address standing in for an unassigned relayer.
    """
    require_uint("expiration", expiration, UINT64_MAX)
    require_uint("payment_amount", payment_amount, UINT128_MAX)
    return encode_packed(
        ["uint64", "address", "address", "uint128"],
        [
            expiration,
            to_checksum(relayer) if relayer else ZERO_ADDRESS,
            to_checksum(payment_token),
            payment_amount,
        ],
    )


def parse_header(header: bytes) -> Tuple[int, Optional[str]]:
    """
    Split a raw-hash scheme header into expiration and relayer.

    Raises:
        EncodingInvariantViolation: If the header is neither 8 nor 28 bytes
    """
    if len(header) not in (HEADER_LENGTH, HEADER_WITH_RELAYER_LENGTH):
        raise EncodingInvariantViolation(
            f"Header must be {HEADER_LENGTH} or {HEADER_WITH_RELAYER_LENGTH} bytes, got {len(header)}"
        )
    expiration = int.from_bytes(header[:EXPIRATION_SIZE], "big")
    relayer = to_checksum(header[EXPIRATION_SIZE:]) if len(header) == HEADER_WITH_RELAYER_LENGTH else None
    return expiration, relayer


def parse_typed_header(header: bytes) -> Tuple[int, Optional[str], str, int]:
    """
    Split a typed-data scheme header into expiration, relayer, payment token and amount.

    Raises:
        EncodingInvariantViolation: If the header is not 64 bytes
    """
    if len(header) != TYPED_HEADER_LENGTH:
        raise EncodingInvariantViolation(
            f"Typed header must be {TYPED_HEADER_LENGTH} bytes, got {len(header)}"
        )
    expiration = int.from_bytes(header[:8], "big")
    relayer = to_checksum(header[8:28])
    payment_token = to_checksum(header[28:48])
    payment_amount = int.from_bytes(header[48:64], "big")
    return expiration, (None if is_zero_address(relayer) else relayer), payment_token, payment_amount
