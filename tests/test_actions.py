"""
Tests for action encoding.
"""
import pytest
from eth_abi import decode as abi_decode

from erc7806_sdk.actions import (
    ERC20_TRANSFER_SELECTOR,
    action_to_call,
    decode_action,
    encode_action,
    encode_erc20_transfer_call,
    parse_action,
)
from erc7806_sdk.exceptions import EncodingInvariantViolation, ValidationError
from erc7806_sdk.models import GeneralExecution, TransferErc20, TransferEth
from conftest import SEPOLIA_SIGNER, TEST_RECEIVER, TEST_TOKEN


def test_erc20_transfer_selector():
    assert ERC20_TRANSFER_SELECTOR.hex() == "a9059cbb"


def test_encode_transfer_eth_layout(eth_action):
    encoded = encode_action(eth_action)

    # address slot, value slot, bytes offset, bytes length (zero) and no data
    assert len(encoded) == 128
    assert encoded[12:32] == bytes.fromhex(TEST_RECEIVER[2:])
    assert int.from_bytes(encoded[32:64], "big") == 1000
    assert int.from_bytes(encoded[64:96], "big") == 96
    assert int.from_bytes(encoded[96:128], "big") == 0


def test_encode_transfer_erc20_layout(erc20_action):
    encoded = encode_action(erc20_action)

    assert len(encoded) == 224
    target, value, data = abi_decode(["address", "uint256", "bytes"], encoded)
    assert target.lower() == TEST_TOKEN.lower()
    # ETH value is zero; the token amount lives in the calldata
    assert value == 0
    assert data[:4] == bytes.fromhex("a9059cbb")
    receiver, amount = abi_decode(["address", "uint256"], data[4:])
    assert receiver.lower() == TEST_RECEIVER.lower()
    assert amount == 5 * 10**18


def test_encode_general_execution_pads_calldata():
    encoded = encode_action({
        "type": "GENERAL_EXECUTION",
        "targetAddress": TEST_TOKEN,
        "amount": 3,
        "calldata": "0xabcd",
    })

    assert len(encoded) == 160
    assert int.from_bytes(encoded[32:64], "big") == 3
    assert int.from_bytes(encoded[96:128], "big") == 2
    assert encoded[128:130] == b"\xab\xcd"
    assert encoded[130:] == b"\x00" * 30


def test_general_execution_without_amount_sends_zero_value():
    action = GeneralExecution(target_address=TEST_TOKEN, calldata=b"\x01")
    assert action.value == 0
    assert int.from_bytes(encode_action(action)[32:64], "big") == 0


def test_model_and_mapping_encode_identically(erc20_action):
    model = TransferErc20(receiver=TEST_RECEIVER, amount=5 * 10**18, token_address=TEST_TOKEN)
    assert encode_action(model) == encode_action(erc20_action)


def test_lowercase_addresses_are_accepted():
    action = parse_action({"type": "TRANSFER_ETH", "receiver": SEPOLIA_SIGNER.lower(), "amount": 1})
    assert action.receiver == SEPOLIA_SIGNER


@pytest.mark.parametrize("action", [
    {"type": "TRANSFER_ETH", "amount": 1},
    {"type": "TRANSFER_ETH", "receiver": TEST_RECEIVER},
    {"type": "TRANSFER_ERC20", "receiver": TEST_RECEIVER, "amount": 1},
    {"type": "GENERAL_EXECUTION", "targetAddress": TEST_TOKEN},
])
def test_missing_fields_raise_validation_error(action):
    with pytest.raises(ValidationError):
        encode_action(action)


def test_unknown_action_type():
    with pytest.raises(ValidationError) as exc_info:
        encode_action({"type": "SELF_DESTRUCT", "receiver": TEST_RECEIVER})
    assert "SELF_DESTRUCT" in str(exc_info.value)


def test_non_mapping_action_rejected():
    with pytest.raises(ValidationError):
        parse_action(["TRANSFER_ETH", TEST_RECEIVER, 1])


def test_negative_amount_rejected():
    with pytest.raises(ValidationError):
        encode_action({"type": "TRANSFER_ETH", "receiver": TEST_RECEIVER, "amount": -1})


def test_invalid_address_rejected():
    with pytest.raises(ValidationError):
        encode_action({"type": "TRANSFER_ETH", "receiver": "0x1234", "amount": 1})


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        parse_action({"type": "TRANSFER_ETH"})


def test_decode_action(general_action):
    call = decode_action(encode_action(general_action))
    assert call.target == TEST_TOKEN
    assert call.value == 7
    assert call.data == bytes.fromhex("deadbeef")


def test_decode_matches_action_to_call(erc20_action):
    assert decode_action(encode_action(erc20_action)) == action_to_call(erc20_action)


def test_action_to_call_eth(eth_action):
    call = action_to_call(eth_action)
    assert call.target == TEST_RECEIVER
    assert call.value == 1000
    assert call.data == b""


def test_decode_short_action():
    with pytest.raises(EncodingInvariantViolation):
        decode_action(b"\x00" * 127)


def test_decode_garbage_action():
    # Offset word points far past the end of the buffer
    garbage = b"\x00" * 64 + b"\xff" * 64
    with pytest.raises(EncodingInvariantViolation):
        decode_action(garbage)


def test_encode_erc20_transfer_call_length():
    calldata = encode_erc20_transfer_call(TEST_RECEIVER, 1)
    assert len(calldata) == 68
    assert calldata.startswith(ERC20_TRANSFER_SELECTOR)


def test_transfer_eth_model_is_frozen():
    action = TransferEth(receiver=TEST_RECEIVER, amount=1)
    with pytest.raises(Exception):
        action.amount = 2
