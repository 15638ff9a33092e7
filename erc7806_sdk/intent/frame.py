"""
Relay intent frame layout.

::

    address signer | address verifyingContract |
    uint16 headerLength | uint16 instructionLength | uint16 signatureLength |
    header | instructions | signature

All integers are big-endian. There is no checksum: the relay contract
re-derives the hash from the raw bytes and checks the signature.
"""
from typing import NamedTuple

from eth_abi.packed import encode_packed

from ..exceptions import EncodingInvariantViolation
from ..utils import UINT16_MAX, to_checksum
from .signing import SIGNATURE_LENGTH

FRAME_PREFIX_LENGTH = 20 + 20 + 2 + 2 + 2


class IntentFrame(NamedTuple):
    signer: str
    verifying_contract: str
    header: bytes
    instructions: bytes
    signature: bytes


def _check_length(name: str, value: bytes) -> None:
    if len(value) > UINT16_MAX:
        raise EncodingInvariantViolation(f"{name} is {len(value)} bytes; at most {UINT16_MAX} fit in the frame")


def assemble_frame(
    signer_address: str,
    verifying_contract: str,
    header: bytes,
    instructions: bytes,
    signature: bytes,
) -> bytes:
    """
    Lay out the final relay intent frame.

    Raises:
        EncodingInvariantViolation: If a section is too long for its length
            field or the signature is not 65 bytes
    """
    _check_length("header", header)
    _check_length("instructions", instructions)
    if len(signature) != SIGNATURE_LENGTH:
        raise EncodingInvariantViolation(
            f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}"
        )

    return encode_packed(
        ["address", "address", "uint16", "uint16", "uint16", "bytes", "bytes", "bytes"],
        [
            to_checksum(signer_address),
            to_checksum(verifying_contract),
            len(header),
            len(instructions),
            len(signature),
            bytes(header),
            bytes(instructions),
            bytes(signature),
        ],
    )


def parse_frame(frame: bytes) -> IntentFrame:
    """
    Split a frame into its sections using the three length fields.

    Raises:
        EncodingInvariantViolation: If the length fields disagree with the
            frame size or the signature length is not 65
    """
    if len(frame) < FRAME_PREFIX_LENGTH:
        raise EncodingInvariantViolation(
            f"Frame must be at least {FRAME_PREFIX_LENGTH} bytes, got {len(frame)}"
        )

    header_length = int.from_bytes(frame[40:42], "big")
    instruction_length = int.from_bytes(frame[42:44], "big")
    signature_length = int.from_bytes(frame[44:46], "big")
    if signature_length != SIGNATURE_LENGTH:
        raise EncodingInvariantViolation(
            f"Signature length field is {signature_length}, expected {SIGNATURE_LENGTH}"
        )

    expected = FRAME_PREFIX_LENGTH + header_length + instruction_length + signature_length
    if len(frame) != expected:
        raise EncodingInvariantViolation(
            f"Frame is {len(frame)} bytes but its length fields describe {expected}"
        )

    header_end = FRAME_PREFIX_LENGTH + header_length
    instructions_end = header_end + instruction_length
    return IntentFrame(
        signer=to_checksum(frame[:20]),
        verifying_contract=to_checksum(frame[20:40]),
        header=bytes(frame[FRAME_PREFIX_LENGTH:header_end]),
        instructions=bytes(frame[header_end:instructions_end]),
        signature=bytes(frame[instructions_end:]),
    )
