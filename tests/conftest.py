"""
Pytest fixtures for the ERC-7806 SDK tests.
"""
import time
from unittest.mock import MagicMock

import pytest
from eth_account import Account
from web3 import Web3
from web3.providers.rpc import HTTPProvider

from erc7806_sdk.config import NetworkConfig
from erc7806_sdk.signer import LocalSigner

# Constants for testing
TEST_RPC_URL = "https://rpc.example.com"
TEST_PRIV_KEY = "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
TEST_CHAIN_ID = 11155111
TEST_REGISTRY = Web3.to_checksum_address("0x1EcBE25525F6e6cDe8631e602Df6D55D3967cDF8")
TEST_RELAY_CONTRACT = Web3.to_checksum_address("0xE0E55Ce1C4C914822425e270D4Eb1bF5B7bB824B")
TEST_STANDARD = Web3.to_checksum_address("0xeEDb221A8fA468A5469F1770Ca13cB6e20EdCB39")
TEST_RECEIVER = "0x1234567890123456789012345678901234567890"
TEST_TOKEN = "0x9876543210987654321098765432109876543210"
TEST_RELAYER = "0x2345678901234567890123456789012345678901"
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
FIXED_NOW = 1_700_000_000

# Permit signed on Sepolia by 0x0970c10E...7E13
SEPOLIA_NONCE = 1743744596651
SEPOLIA_SIGNATURE = (
    "0x835cdaf7384aa7ad82559926e6dda6470c7ad368a354e019cbc4a59be0a9d95a"
    "52430d807d77bd490db70fdbf45056fca9dc4626b88b8e87ea06d37d187225f61b"
)
SEPOLIA_SIGNER = Web3.to_checksum_address("0x0970c10Ea0605dBD54564AcFcd93237865Ee7E13")


@pytest.fixture(autouse=True)
def _patch_http_provider(monkeypatch):
    """
    Stub every Web3 HTTP call so no DNS / network traffic is triggered.
    Works for all tests because it is autouse.
    """
    def _dummy(self, method, params=None, _=None):
        if method == "eth_chainId":
            return {"jsonrpc": "2.0", "id": 1, "result": hex(TEST_CHAIN_ID)}
        return {"jsonrpc": "2.0", "id": 1, "result": "0x0"}

    monkeypatch.setattr(HTTPProvider, "make_request", _dummy, raising=True)


@pytest.fixture(autouse=True)
def _reset_network_cache():
    """Each test starts from the bundled network table."""
    NetworkConfig._networks_cache = None
    yield
    NetworkConfig._networks_cache = None


@pytest.fixture
def frozen_time(monkeypatch):
    """Pin time.time() so expirations are deterministic"""
    monkeypatch.setattr(time, "time", lambda: float(FIXED_NOW))
    return FIXED_NOW


@pytest.fixture
def local_signer():
    return LocalSigner(TEST_PRIV_KEY)


@pytest.fixture
def mock_account():
    """Create a deterministic test account"""
    return Account.from_key(TEST_PRIV_KEY)


@pytest.fixture
def eth_action():
    return {"type": "TRANSFER_ETH", "receiver": TEST_RECEIVER, "amount": "1000"}


@pytest.fixture
def erc20_action():
    return {
        "type": "TRANSFER_ERC20",
        "receiver": TEST_RECEIVER,
        "amount": 5 * 10**18,
        "tokenAddress": TEST_TOKEN,
    }


@pytest.fixture
def general_action():
    return {
        "type": "GENERAL_EXECUTION",
        "targetAddress": TEST_TOKEN,
        "amount": 7,
        "calldata": "0xdeadbeef",
    }


@pytest.fixture
def mock_w3():
    """Mock Web3 instance whose contract() returns a configurable contract mock"""
    mock = MagicMock(spec=Web3)
    eth = MagicMock()
    eth.get_transaction_count = MagicMock(return_value=12)
    eth.send_raw_transaction = MagicMock(return_value=bytes.fromhex("ab" * 32))
    eth.wait_for_transaction_receipt = MagicMock(return_value={"status": 1, "blockNumber": 12345})
    eth.contract = MagicMock(return_value=MagicMock())
    mock.eth = eth
    return mock


@pytest.fixture
def tx_signer():
    """Signer stub that signs transactions into fixed raw bytes"""
    signer = MagicMock()
    signer.address = TEST_RECEIVER
    signer.sign_transaction = MagicMock(return_value=MagicMock(raw_transaction=b"signed_transaction"))
    return signer
