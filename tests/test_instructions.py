"""
Tests for instruction block and header packing.
"""
import pytest

from erc7806_sdk.exceptions import EncodingInvariantViolation
from erc7806_sdk.intent.header import (
    build_header,
    build_typed_header,
    expiration_timestamp,
    parse_header,
    parse_typed_header,
)
from erc7806_sdk.intent.instructions import (
    pack_action_list,
    pack_instructions,
    unpack_action_list,
    unpack_instructions,
)
from erc7806_sdk.utils import UINT128_MAX
from conftest import FIXED_NOW, TEST_RECEIVER, TEST_RELAYER, TEST_TOKEN, ZERO_ADDRESS


class TestInstructions:
    """Raw-hash instruction block"""

    def test_empty_action_list(self):
        block = pack_instructions(TEST_TOKEN, 0, [])
        assert len(block) == 21
        assert block[:20] == bytes.fromhex(TEST_TOKEN[2:])
        assert block[20:36] == b"\x00" * 16
        assert block[36] == 0

    def test_single_eth_action(self, eth_action):
        block = pack_instructions(TEST_TOKEN, 10**6, [eth_action])

        assert len(block) == 21 + 2 + 128
        assert int.from_bytes(block[20:36], "big") == 10**6
        assert block[36] == 1
        # The record prefix stores the action length minus one
        assert block[37:39] == (127).to_bytes(2, "big")

    def test_action_order_is_preserved(self, eth_action, erc20_action, general_action):
        actions = [general_action, eth_action, erc20_action]
        token, amount, encoded = unpack_instructions(pack_instructions(TEST_TOKEN, 5, actions))

        assert token == TEST_TOKEN
        assert amount == 5
        assert [len(action) for action in encoded] == [160, 128, 224]

    def test_too_many_actions(self, eth_action):
        with pytest.raises(EncodingInvariantViolation):
            pack_instructions(TEST_TOKEN, 0, [eth_action] * 256)

    def test_max_actions(self, eth_action):
        block = pack_instructions(TEST_TOKEN, 0, [eth_action] * 255)
        assert block[36] == 255

    @pytest.mark.parametrize("amount", [-1, UINT128_MAX + 1])
    def test_payment_amount_out_of_range(self, amount):
        with pytest.raises(EncodingInvariantViolation):
            pack_instructions(TEST_TOKEN, amount, [])

    def test_payment_amount_max(self):
        block = pack_instructions(TEST_TOKEN, UINT128_MAX, [])
        assert block[20:36] == b"\xff" * 16

    def test_unpack_short_block(self):
        with pytest.raises(EncodingInvariantViolation):
            unpack_instructions(b"\x00" * 36)


class TestActionList:
    """Count-prefixed list of length-prefixed actions"""

    def test_roundtrip(self):
        actions = [b"\x01" * 128, b"\x02" * 160]
        assert unpack_action_list(pack_action_list(actions)) == actions

    def test_empty(self):
        assert pack_action_list([]) == b"\x00"
        assert unpack_action_list(b"\x00") == []

    def test_count_mismatch(self):
        packed = bytearray(pack_action_list([b"\x01" * 128]))
        packed[0] = 2
        with pytest.raises(EncodingInvariantViolation) as exc_info:
            unpack_action_list(bytes(packed))
        assert "mismatch" in str(exc_info.value)

    def test_truncated_record(self):
        packed = pack_action_list([b"\x01" * 128])
        with pytest.raises(EncodingInvariantViolation):
            unpack_action_list(packed[:-1])

    def test_truncated_length_prefix(self):
        with pytest.raises(EncodingInvariantViolation):
            unpack_action_list(b"\x01\x00")

    def test_empty_bytes(self):
        with pytest.raises(EncodingInvariantViolation):
            unpack_action_list(b"")

    def test_empty_action_rejected(self):
        with pytest.raises(EncodingInvariantViolation):
            pack_action_list([b""])


class TestHeader:
    """Raw-hash and typed-data headers"""

    def test_header_without_relayer(self, frozen_time):
        header = build_header(10)
        assert len(header) == 8
        assert int.from_bytes(header, "big") == FIXED_NOW + 600

    def test_header_with_relayer(self, frozen_time):
        header = build_header(10, TEST_RELAYER)
        assert len(header) == 28
        assert header[8:] == bytes.fromhex(TEST_RELAYER[2:])

    def test_zero_relayer_is_omitted(self, frozen_time):
        assert build_header(10, ZERO_ADDRESS) == build_header(10)

    def test_expiration_timestamp(self, frozen_time):
        assert expiration_timestamp(0) == FIXED_NOW
        assert expiration_timestamp(1) == FIXED_NOW + 60

    def test_expired_in_the_past_overflows(self, frozen_time):
        with pytest.raises(EncodingInvariantViolation):
            expiration_timestamp(-(FIXED_NOW // 60) - 1)

    def test_parse_header(self, frozen_time):
        assert parse_header(build_header(5)) == (FIXED_NOW + 300, None)
        assert parse_header(build_header(5, TEST_RELAYER.lower())) == (FIXED_NOW + 300, TEST_RELAYER)

    def test_parse_header_bad_length(self):
        with pytest.raises(EncodingInvariantViolation):
            parse_header(b"\x00" * 9)

    def test_typed_header(self):
        header = build_typed_header(FIXED_NOW, None, TEST_TOKEN, 42)
        assert len(header) == 64
        assert header[8:28] == b"\x00" * 20
        assert parse_typed_header(header) == (FIXED_NOW, None, TEST_TOKEN, 42)

    def test_typed_header_with_relayer(self):
        header = build_typed_header(FIXED_NOW, TEST_RECEIVER, TEST_TOKEN, 42)
        assert parse_typed_header(header)[1] == TEST_RECEIVER

    def test_typed_header_bad_length(self):
        with pytest.raises(EncodingInvariantViolation):
            parse_typed_header(b"\x00" * 63)
