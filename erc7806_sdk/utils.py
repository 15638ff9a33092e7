"""
Utility functions for the ERC-7806 SDK.
"""
import time
from typing import Union

from web3 import Web3

from .exceptions import EncodingInvariantViolation, ValidationError

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

UINT8_MAX = 2**8 - 1
UINT16_MAX = 2**16 - 1
UINT64_MAX = 2**64 - 1
UINT128_MAX = 2**128 - 1
UINT256_MAX = 2**256 - 1


def to_checksum(address: Union[str, bytes]) -> str:
    """
    Normalize an address to its EIP-55 checksummed form.

    Args:
        address: Hex string (with or without ``0x``) or 20 raw bytes

    Returns:
        The checksummed address

    Raises:
        ValidationError: If the value is not a 20-byte address, or is
            mixed-case with a wrong checksum
    """
    if isinstance(address, (bytes, bytearray)):
        if len(address) != 20:
            raise ValidationError(f"Address must be 20 bytes, got {len(address)}")
        return Web3.to_checksum_address("0x" + bytes(address).hex())
    if not isinstance(address, str) or not address:
        raise ValidationError(f"Invalid address: {address!r}")
    digits = address[2:] if address.startswith(("0x", "0X")) else address
    value = "0x" + digits
    if not Web3.is_address(value.lower()):
        raise ValidationError(f"Invalid address: {address!r}")
    # All-lower and all-upper carry no checksum; mixed case must match EIP-55
    if digits not in (digits.lower(), digits.upper()) and not Web3.is_checksum_address(value):
        raise ValidationError(f"Bad address checksum: {address!r}")
    return Web3.to_checksum_address(value.lower())


def is_zero_address(address: Union[str, bytes]) -> bool:
    """True when the address is the all-zero address."""
    return to_checksum(address) == ZERO_ADDRESS


def to_bytes(value: Union[str, bytes]) -> bytes:
    """Convert a 0x-prefixed hex string (or bytes) to bytes."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return bytes(Web3.to_bytes(hexstr=value))


def to_hex(value: bytes) -> str:
    """Hex encode bytes with a 0x prefix."""
    return "0x" + bytes(value).hex()


def require_uint(name: str, value: int, max_value: int) -> int:
    """
    Check that an integer fits its fixed-width unsigned slot.

    Raises:
        EncodingInvariantViolation: If the value is negative or too large
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodingInvariantViolation(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0 or value > max_value:
        raise EncodingInvariantViolation(f"{name} {value} does not fit in [0, {max_value}]")
    return value


def current_timestamp_ms() -> int:
    """Current wall clock time in milliseconds."""
    return int(time.time() * 1000)
