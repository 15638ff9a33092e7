"""
Relay instruction block packing.

Layout of the block signed under the raw-hash scheme::

    address paymentToken | uint128 paymentAmount | uint8 count | record*

where each record is ``uint16 (len - 1) | encoded action``. The typed-data
scheme carries the payment in the header and packs only ``count | record*``.
"""
import logging
from typing import List, Sequence, Tuple

from eth_abi.packed import encode_packed

from ..actions import ActionLike, encode_action
from ..exceptions import EncodingInvariantViolation
from ..utils import UINT8_MAX, UINT16_MAX, UINT128_MAX, require_uint, to_checksum

logger = logging.getLogger(__name__)

PAYMENT_PREFIX_LENGTH = 20 + 16
LENGTH_PREFIX_SIZE = 2
MAX_ACTIONS = UINT8_MAX
# A record stores len - 1, so the longest action is one byte past uint16
MAX_ENCODED_ACTION_LENGTH = UINT16_MAX + 1


def pack_action_list(encoded_actions: Sequence[bytes]) -> bytes:
    """
    Pack already-encoded actions as ``uint8 count | (uint16 len-1 | action)*``.

    The count is taken from the sequence itself so it always matches the
    number of records that follow.

    Raises:
        EncodingInvariantViolation: If there are more than 255 actions or an
            action does not fit its length prefix
    """
    if len(encoded_actions) > MAX_ACTIONS:
        raise EncodingInvariantViolation(
            f"At most {MAX_ACTIONS} actions fit in one intent, got {len(encoded_actions)}"
        )

    records = [encode_packed(["uint8"], [len(encoded_actions)])]
    for index, encoded in enumerate(encoded_actions):
        if not 1 <= len(encoded) <= MAX_ENCODED_ACTION_LENGTH:
            raise EncodingInvariantViolation(
                f"Action {index} is {len(encoded)} bytes; must be 1..{MAX_ENCODED_ACTION_LENGTH}"
            )
        records.append(encode_packed(["uint16", "bytes"], [len(encoded) - 1, encoded]))
    return b"".join(records)


def unpack_action_list(data: bytes) -> List[bytes]:
    """
    Split a packed action list back into encoded actions.

    The count byte is cross-checked against the records actually present.

    Raises:
        EncodingInvariantViolation: If the count disagrees with the records,
            a record is truncated or trailing bytes remain
    """
    if not data:
        raise EncodingInvariantViolation("Action list is empty; expected at least the count byte")

    declared = data[0]
    offset = 1
    actions: List[bytes] = []
    while offset < len(data):
        if offset + LENGTH_PREFIX_SIZE > len(data):
            raise EncodingInvariantViolation(f"Truncated length prefix at offset {offset}")
        length = int.from_bytes(data[offset:offset + LENGTH_PREFIX_SIZE], "big") + 1
        offset += LENGTH_PREFIX_SIZE
        if offset + length > len(data):
            raise EncodingInvariantViolation(
                f"Action {len(actions)} claims {length} bytes but only {len(data) - offset} remain"
            )
        actions.append(bytes(data[offset:offset + length]))
        offset += length

    if len(actions) != declared:
        raise EncodingInvariantViolation(
            f"Action count mismatch: header declares {declared}, found {len(actions)}"
        )
    return actions


def pack_instructions(
    payment_token: str,
    payment_amount: int,
    actions: Sequence[ActionLike],
) -> bytes:
    """
    Build the relay instruction block for the raw-hash scheme.

    Args:
        payment_token: Token the relayer is paid in
        payment_amount: Amount paid to the relayer (uint128)
        actions: Actions to execute, in order

    Returns:
        ``paymentToken(20) | paymentAmount(16) | count(1) | records``

    Raises:
        ValidationError: If an action is invalid
        EncodingInvariantViolation: If a field overflows its slot
    """
    require_uint("payment_amount", payment_amount, UINT128_MAX)
    if len(actions) > MAX_ACTIONS:
        raise EncodingInvariantViolation(
            f"At most {MAX_ACTIONS} actions fit in one intent, got {len(actions)}"
        )

    encoded_actions = [encode_action(action) for action in actions]
    block = encode_packed(
        ["address", "uint128"], [to_checksum(payment_token), payment_amount]
    ) + pack_action_list(encoded_actions)
    logger.debug(f"Packed {len(encoded_actions)} actions into {len(block)}-byte instruction block")
    return block


def unpack_instructions(block: bytes) -> Tuple[str, int, List[bytes]]:
    """
    Split a raw-hash instruction block into payment token, amount and actions.

    Raises:
        EncodingInvariantViolation: If the block is malformed
    """
    if len(block) < PAYMENT_PREFIX_LENGTH + 1:
        raise EncodingInvariantViolation(
            f"Instruction block must be at least {PAYMENT_PREFIX_LENGTH + 1} bytes, got {len(block)}"
        )
    payment_token = to_checksum(block[:20])
    payment_amount = int.from_bytes(block[20:PAYMENT_PREFIX_LENGTH], "big")
    return payment_token, payment_amount, unpack_action_list(block[PAYMENT_PREFIX_LENGTH:])
