"""
Tests for the NetworkConfig module.
"""
import pytest
import os
from unittest.mock import patch

from erc7806_sdk.config import NetworkConfig
from erc7806_sdk.models import BlockchainContext, BlockchainEnum
from conftest import TEST_REGISTRY, TEST_RELAY_CONTRACT

# Sample network configuration
MOCK_NETWORKS = {
    "ETH_SEPOLIA": BlockchainContext(
        symbol="ETH_SEPOLIA",
        chainId=123,
        isTestnet=True,
        rpc="https://test.example.com",
        standardRegistry="0x1234567890123456789012345678901234567890",
        relayExecutionStandard="0x0987654321098765432109876543210987654321",
    ),
    "ODYSSEY": BlockchainContext(
        symbol="ODYSSEY",
        chainId=456,
        standardRegistry="0x1234567890123456789012345678901234567890",
        relayExecutionStandard="0x",
    ),
}


class TestNetworkConfig:
    """Test NetworkConfig class."""

    def test_load_networks_cached(self):
        """Test that networks are cached after first load."""
        NetworkConfig._networks_cache = MOCK_NETWORKS

        # This should return from cache without opening the file
        with patch("importlib.resources.files") as mock_files:
            result = NetworkConfig.load_networks()
            mock_files.assert_not_called()

        assert result == MOCK_NETWORKS

    def test_load_bundled_networks(self):
        """The bundled table parses and is read-only."""
        networks = NetworkConfig.load_networks()

        assert set(networks) == {member.value for member in BlockchainEnum}
        with pytest.raises(TypeError):
            networks["ETH"] = None

    def test_bundled_sepolia(self):
        sepolia = NetworkConfig.get_network(BlockchainEnum.ETH_SEPOLIA)

        assert sepolia.chain_id == 11155111
        assert sepolia.is_testnet is True
        assert sepolia.standard_registry == TEST_REGISTRY
        assert sepolia.relay_execution_standard == TEST_RELAY_CONTRACT

    def test_undeployed_contracts_are_none(self):
        assert NetworkConfig.get_network("ODYSSEY").relay_execution_standard is None
        assert NetworkConfig.get_network("UNKNOWN").standard_registry is None

    def test_get_network(self):
        """Test getting a specific network configuration."""
        NetworkConfig._networks_cache = MOCK_NETWORKS

        result = NetworkConfig.get_network("ETH_SEPOLIA")

        assert result == MOCK_NETWORKS["ETH_SEPOLIA"]
        assert result.chain_id == 123
        assert result.rpc == "https://test.example.com"

    def test_get_network_not_found(self):
        """Test getting a non-existent network."""
        NetworkConfig._networks_cache = MOCK_NETWORKS

        with pytest.raises(ValueError) as exc_info:
            NetworkConfig.get_network("non-existent-network")

        # Verify error message includes available networks
        assert "ETH_SEPOLIA" in str(exc_info.value)

    def test_get_by_chain_id(self):
        assert NetworkConfig.get_by_chain_id(84532).symbol is BlockchainEnum.BASE_SEPOLIA

    def test_get_by_chain_id_not_found(self):
        with pytest.raises(ValueError, match="999"):
            NetworkConfig.get_by_chain_id(999)

    def test_get_rpc_url_default(self, monkeypatch):
        """Test getting RPC URL from network config."""
        NetworkConfig._networks_cache = MOCK_NETWORKS
        monkeypatch.delenv("ETH_SEPOLIA_RPC_URL", raising=False)

        assert NetworkConfig.get_rpc_url("ETH_SEPOLIA") == "https://test.example.com"

    def test_get_rpc_url_override(self):
        """Test RPC URL override parameter."""
        NetworkConfig._networks_cache = MOCK_NETWORKS

        result = NetworkConfig.get_rpc_url("ETH_SEPOLIA", override="https://override.example.com")

        assert result == "https://override.example.com"

    def test_get_rpc_url_env_var(self):
        """Test RPC URL from environment variable."""
        NetworkConfig._networks_cache = MOCK_NETWORKS

        with patch.dict(os.environ, {"ETH_SEPOLIA_RPC_URL": "https://env.example.com"}):
            result = NetworkConfig.get_rpc_url("ETH_SEPOLIA")

        assert result == "https://env.example.com"

    def test_get_rpc_url_missing(self, monkeypatch):
        NetworkConfig._networks_cache = MOCK_NETWORKS
        monkeypatch.delenv("ODYSSEY_RPC_URL", raising=False)

        with pytest.raises(ValueError, match="ODYSSEY_RPC_URL"):
            NetworkConfig.get_rpc_url("ODYSSEY")

    def test_get_chain_id(self):
        """Test getting chain ID from network config."""
        NetworkConfig._networks_cache = MOCK_NETWORKS

        assert NetworkConfig.get_chain_id("ETH_SEPOLIA") == 123

    def test_get_standard_registry_address(self):
        """Test getting StandardRegistry address from network config."""
        NetworkConfig._networks_cache = MOCK_NETWORKS

        result = NetworkConfig.get_standard_registry_address("ETH_SEPOLIA")

        assert result == "0x1234567890123456789012345678901234567890"

    def test_get_relay_execution_standard_address(self):
        NetworkConfig._networks_cache = MOCK_NETWORKS

        result = NetworkConfig.get_relay_execution_standard_address(BlockchainEnum.ETH_SEPOLIA)

        assert result == "0x0987654321098765432109876543210987654321"

    def test_relay_execution_standard_not_deployed(self):
        NetworkConfig._networks_cache = MOCK_NETWORKS

        with pytest.raises(ValueError, match="not deployed"):
            NetworkConfig.get_relay_execution_standard_address("ODYSSEY")
