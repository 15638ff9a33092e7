"""
Relay execution intents.

An intent bundles actions, a relayer payment and an expiration into a
signed frame that the RelayedExecutionStandard contract parses and executes
on behalf of the signer.
"""
import logging
from typing import Any, List, NamedTuple, Optional, Sequence

from ..actions import ActionLike, decode_action, encode_action
from ..exceptions import EncodingInvariantViolation, SigningError
from ..models import DecodedIntent, IntentScheme
from ..utils import UINT128_MAX, require_uint, to_checksum
from .frame import IntentFrame, assemble_frame, parse_frame
from .header import (
    build_header,
    build_typed_header,
    expiration_timestamp,
    parse_header,
    parse_typed_header,
)
from .instructions import (
    MAX_ACTIONS,
    pack_action_list,
    pack_instructions,
    unpack_action_list,
    unpack_instructions,
)
from .signing import (
    build_intent_typed_data,
    intent_hash,
    recover_intent_hash_signer,
    recover_intent_typed_signer,
    sign_intent_hash,
    sign_intent_typed_data,
    typed_data_hash,
)

logger = logging.getLogger(__name__)


class _FrameParts(NamedTuple):
    frame: IntentFrame
    expiration: int
    relayer: Optional[str]
    payment_token: str
    payment_amount: int
    encoded_actions: List[bytes]


def build_relay_execution_intent(
    chain_id: int,
    relay_execution_standard_address: str,
    payment_token_address: str,
    payment_token_amount: int,
    actions: Sequence[ActionLike],
    expiration: int,
    signer: Any,
    relayer_address: Optional[str] = None,
    scheme: IntentScheme = IntentScheme.RAW_HASH,
) -> bytes:
    """
    Build and sign a relay execution intent.

    Args:
        chain_id: Chain the intent is valid on
        relay_execution_standard_address: RelayedExecutionStandard contract
        payment_token_address: Token the relayer is paid in
        payment_token_amount: Amount paid to the relayer (uint128)
        actions: Actions to execute, in order
        expiration: Minutes from now until the intent expires
        signer: Signer whose account executes the actions
        relayer_address: Only this address may relay the intent (optional)
        scheme: How the intent is hashed and signed

    Returns:
        The complete intent frame

    Raises:
        ValidationError: If an action or address is invalid
        EncodingInvariantViolation: If a field overflows its slot
        SigningError: If the signer fails
    """
    scheme = IntentScheme(scheme)
    contract = to_checksum(relay_execution_standard_address)

    if scheme is IntentScheme.RAW_HASH:
        header = build_header(expiration, relayer_address)
        instructions = pack_instructions(payment_token_address, payment_token_amount, actions)
        digest = intent_hash(header + instructions, contract, chain_id)
        logger.debug(f"Signing raw intent hash 0x{digest.hex()}")
        signature = sign_intent_hash(signer, digest)
    else:
        require_uint("payment_amount", payment_token_amount, UINT128_MAX)
        if len(actions) > MAX_ACTIONS:
            raise EncodingInvariantViolation(
                f"At most {MAX_ACTIONS} actions fit in one intent, got {len(actions)}"
            )
        timestamp = expiration_timestamp(expiration)
        encoded_actions = [encode_action(action) for action in actions]
        header = build_typed_header(timestamp, relayer_address, payment_token_address, payment_token_amount)
        instructions = pack_action_list(encoded_actions)
        full_message = build_intent_typed_data(
            chain_id,
            contract,
            timestamp,
            relayer_address,
            payment_token_address,
            payment_token_amount,
            encoded_actions,
        )
        logger.debug(f"Signing typed intent hash 0x{typed_data_hash(full_message).hex()}")
        signature = sign_intent_typed_data(signer, full_message)

    frame = assemble_frame(signer.address, contract, header, instructions, signature)
    logger.info(
        f"Built {scheme.value} relay intent with {len(actions)} actions "
        f"({len(frame)} bytes) for chain {chain_id}"
    )
    return frame


def _split_frame(frame: bytes, scheme: IntentScheme) -> _FrameParts:
    parsed = parse_frame(frame)
    if IntentScheme(scheme) is IntentScheme.RAW_HASH:
        expiration, relayer = parse_header(parsed.header)
        payment_token, payment_amount, encoded_actions = unpack_instructions(parsed.instructions)
    else:
        expiration, relayer, payment_token, payment_amount = parse_typed_header(parsed.header)
        encoded_actions = unpack_action_list(parsed.instructions)
    return _FrameParts(parsed, expiration, relayer, payment_token, payment_amount, encoded_actions)


def decode_relay_execution_intent(
    frame: bytes,
    scheme: IntentScheme = IntentScheme.RAW_HASH,
) -> DecodedIntent:
    """
    Parse a relay intent frame back into its fields.

    Raises:
        EncodingInvariantViolation: If the frame is malformed
    """
    parts = _split_frame(frame, scheme)
    return DecodedIntent(
        scheme=IntentScheme(scheme),
        signer=parts.frame.signer,
        verifying_contract=parts.frame.verifying_contract,
        expiration=parts.expiration,
        relayer=parts.relayer,
        payment_token=parts.payment_token,
        payment_amount=parts.payment_amount,
        actions=tuple(decode_action(encoded) for encoded in parts.encoded_actions),
        header=parts.frame.header,
        instructions=parts.frame.instructions,
        signature=parts.frame.signature,
    )


def recover_relay_execution_intent_signer(
    frame: bytes,
    chain_id: int,
    scheme: IntentScheme = IntentScheme.RAW_HASH,
) -> str:
    """
    Recover the address that signed a relay intent frame.

    The hash is re-derived from the frame's raw bytes, as the relay
    contract does.

    Raises:
        EncodingInvariantViolation: If the frame is malformed
        SigningError: If no signer can be recovered from the signature
    """
    parts = _split_frame(frame, scheme)
    try:
        if IntentScheme(scheme) is IntentScheme.RAW_HASH:
            digest = intent_hash(
                parts.frame.header + parts.frame.instructions,
                parts.frame.verifying_contract,
                chain_id,
            )
            return recover_intent_hash_signer(digest, parts.frame.signature)

        full_message = build_intent_typed_data(
            chain_id,
            parts.frame.verifying_contract,
            parts.expiration,
            parts.relayer,
            parts.payment_token,
            parts.payment_amount,
            parts.encoded_actions,
        )
        return recover_intent_typed_signer(full_message, parts.frame.signature)
    except Exception as e:
        raise SigningError(f"Cannot recover intent signer: {str(e)}") from e


def verify_relay_execution_intent(
    frame: bytes,
    chain_id: int,
    scheme: IntentScheme = IntentScheme.RAW_HASH,
) -> bool:
    """
    Check that a frame is well formed and signed by the signer it names.

    Returns:
        True if the recovered signer matches the frame's signer address
    """
    try:
        recovered = recover_relay_execution_intent_signer(frame, chain_id, scheme)
        claimed = parse_frame(frame).signer
    except (EncodingInvariantViolation, SigningError) as e:
        logger.debug(f"Intent verification failed: {e}")
        return False
    return recovered.lower() == claimed.lower()


__all__ = [
    "build_relay_execution_intent",
    "decode_relay_execution_intent",
    "recover_relay_execution_intent_signer",
    "verify_relay_execution_intent",
    "build_header",
    "build_typed_header",
    "parse_header",
    "pack_instructions",
    "pack_action_list",
    "unpack_action_list",
    "unpack_instructions",
    "intent_hash",
    "build_intent_typed_data",
    "typed_data_hash",
    "sign_intent_hash",
    "sign_intent_typed_data",
    "assemble_frame",
    "parse_frame",
]
