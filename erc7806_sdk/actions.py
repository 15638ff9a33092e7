"""
Action encoding for the RelayedExecutionStandard.

Every action, whatever its kind, is encoded as the ABI tuple
``(address, uint256, bytes)`` so the on-chain decoder can execute each
instruction the same way: call ``address`` with ``uint256`` wei and
``bytes`` as calldata.
"""
import logging
from typing import Any, Mapping, Union

import pydantic
from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from web3 import Web3

from .exceptions import EncodingInvariantViolation, ValidationError
from .models import Action, ActionCall, GeneralExecution, TransferErc20, TransferEth
from .utils import to_checksum

logger = logging.getLogger(__name__)

ACTION_ABI_TYPES = ["address", "uint256", "bytes"]
ERC20_TRANSFER_SIGNATURE = "transfer(address,uint256)"
ERC20_TRANSFER_SELECTOR = bytes(Web3.keccak(text=ERC20_TRANSFER_SIGNATURE)[:4])

# Two static 32-byte slots, the bytes offset word and the bytes length word
MIN_ENCODED_ACTION_LENGTH = 128

_ACTION_ADAPTER = pydantic.TypeAdapter(Action)

ActionLike = Union[TransferEth, TransferErc20, GeneralExecution, Mapping[str, Any]]


def parse_action(data: ActionLike) -> Union[TransferEth, TransferErc20, GeneralExecution]:
    """
    Validate an action given as a model or a plain mapping.

    Mappings use the same keys as the JSON form of an action, e.g.
    ``{"type": "TRANSFER_ERC20", "receiver": ..., "amount": ..., "tokenAddress": ...}``.

    Raises:
        ValidationError: If the type is unknown or required fields are missing
    """
    if isinstance(data, (TransferEth, TransferErc20, GeneralExecution)):
        return data
    if not isinstance(data, Mapping):
        raise ValidationError(f"Action must be a mapping or action model, got {type(data).__name__}")

    action_type = data.get("type")
    if action_type not in ("TRANSFER_ETH", "TRANSFER_ERC20", "GENERAL_EXECUTION"):
        raise ValidationError(f"Unknown action type: {action_type}")
    try:
        return _ACTION_ADAPTER.validate_python(dict(data))
    except pydantic.ValidationError as e:
        raise ValidationError(f"Missing or invalid fields for {action_type} action: {e}") from e


def _encode_call(target: str, value: int, data: bytes) -> bytes:
    try:
        return abi_encode(ACTION_ABI_TYPES, [target, value, data])
    except Exception as e:
        raise EncodingInvariantViolation(f"Cannot ABI-encode action: {e}") from e


def encode_erc20_transfer_call(receiver: str, amount: int) -> bytes:
    """Calldata for ``IERC20.transfer(receiver, amount)``"""
    return ERC20_TRANSFER_SELECTOR + abi_encode(["address", "uint256"], [to_checksum(receiver), amount])


def encode_transfer_eth(action: TransferEth) -> bytes:
    # Plain value transfer, no calldata
    return _encode_call(action.receiver, action.amount, b"")


def encode_transfer_erc20(action: TransferErc20) -> bytes:
    transfer_calldata = encode_erc20_transfer_call(action.receiver, action.amount)
    # The uint256 slot is the ETH sent along with the call, not the token amount
    return _encode_call(action.token_address, 0, transfer_calldata)


def encode_general_execution(action: GeneralExecution) -> bytes:
    return _encode_call(action.target_address, action.value, action.calldata)


def encode_action(action: ActionLike) -> bytes:
    """
    Encode one action as an ABI ``(address, uint256, bytes)`` tuple.

    Args:
        action: Action model or mapping

    Returns:
        The ABI-encoded tuple

    Raises:
        ValidationError: If the action is invalid or of an unknown type
    """
    action = parse_action(action)
    if isinstance(action, TransferEth):
        encoded = encode_transfer_eth(action)
    elif isinstance(action, TransferErc20):
        encoded = encode_transfer_erc20(action)
    elif isinstance(action, GeneralExecution):
        encoded = encode_general_execution(action)
    else:
        raise ValidationError(f"Unknown action type: {type(action).__name__}")

    logger.debug(f"Encoded {action.type} action ({len(encoded)} bytes)")
    return encoded


def action_to_call(action: ActionLike) -> ActionCall:
    """The (target, value, data) tuple an action encodes to"""
    action = parse_action(action)
    if isinstance(action, TransferEth):
        return ActionCall(target=action.receiver, value=action.amount, data=b"")
    if isinstance(action, TransferErc20):
        return ActionCall(
            target=action.token_address,
            value=0,
            data=encode_erc20_transfer_call(action.receiver, action.amount),
        )
    if isinstance(action, GeneralExecution):
        return ActionCall(target=action.target_address, value=action.value, data=action.calldata)
    raise ValidationError(f"Unknown action type: {type(action).__name__}")


def decode_action(encoded: bytes) -> ActionCall:
    """
    Decode an encoded action back into its (target, value, data) tuple.

    Raises:
        EncodingInvariantViolation: If the bytes are not a valid encoding
    """
    if len(encoded) < MIN_ENCODED_ACTION_LENGTH:
        raise EncodingInvariantViolation(
            f"Encoded action must be at least {MIN_ENCODED_ACTION_LENGTH} bytes, got {len(encoded)}"
        )
    try:
        target, value, data = abi_decode(ACTION_ABI_TYPES, bytes(encoded))
    except Exception as e:
        raise EncodingInvariantViolation(f"Cannot decode action: {e}") from e
    return ActionCall(target=to_checksum(target), value=value, data=bytes(data))
