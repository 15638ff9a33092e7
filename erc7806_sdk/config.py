"""
Network configuration for the ERC-7806 SDK.

Deployment addresses for every supported chain live in the bundled
``networks.json`` and are loaded once into a read-only table.
"""
import importlib.resources
import json
import logging
import os
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .models import BlockchainContext, BlockchainEnum

logger = logging.getLogger(__name__)

NetworkKey = Union[str, BlockchainEnum]


class NetworkConfig:
    """Lookup of per-chain deployment addresses."""

    _networks_cache: Optional[Mapping[str, BlockchainContext]] = None

    @classmethod
    def load_networks(cls) -> Mapping[str, BlockchainContext]:
        """
        Load the network table, keyed by network symbol.

        Returns:
            Read-only mapping of symbol to BlockchainContext
        """
        if cls._networks_cache is not None:
            return cls._networks_cache

        resource = importlib.resources.files("erc7806_sdk").joinpath("networks.json")
        with resource.open("r", encoding="utf-8") as f:
            raw = json.load(f)

        networks = {
            symbol: BlockchainContext.model_validate(entry)
            for symbol, entry in raw.items()
        }
        logger.debug(f"Loaded {len(networks)} network definitions")
        cls._networks_cache = MappingProxyType(networks)
        return cls._networks_cache

    @classmethod
    def get_network(cls, network: NetworkKey) -> BlockchainContext:
        """
        Get the configuration of a network by symbol.

        Raises:
            ValueError: If the network is unknown
        """
        networks = cls.load_networks()
        key = network.value if isinstance(network, BlockchainEnum) else network
        if key not in networks:
            available = ", ".join(networks.keys())
            raise ValueError(f"Network '{key}' not found. Available networks: {available}")
        return networks[key]

    @classmethod
    def get_by_chain_id(cls, chain_id: int) -> BlockchainContext:
        """
        Get the configuration of a network by numeric chain ID.

        Raises:
            ValueError: If no network has this chain ID
        """
        for context in cls.load_networks().values():
            if context.chain_id == chain_id:
                return context
        raise ValueError(f"No network configured for chain ID {chain_id}")

    @classmethod
    def get_chain_id(cls, network: NetworkKey) -> int:
        return cls.get_network(network).chain_id

    @classmethod
    def get_standard_registry_address(cls, network: NetworkKey) -> str:
        address = cls.get_network(network).standard_registry
        if address is None:
            raise ValueError(f"StandardRegistry is not deployed on {network}")
        return address

    @classmethod
    def get_relay_execution_standard_address(cls, network: NetworkKey) -> str:
        address = cls.get_network(network).relay_execution_standard
        if address is None:
            raise ValueError(f"RelayedExecutionStandard is not deployed on {network}")
        return address

    @classmethod
    def get_rpc_url(cls, network: NetworkKey, override: Optional[str] = None) -> str:
        """
        Resolve the RPC URL for a network.

        Precedence: explicit override, then the ``{SYMBOL}_RPC_URL``
        environment variable, then the bundled default.

        Raises:
            ValueError: If no RPC URL is available
        """
        if override:
            return override

        context = cls.get_network(network)
        env_var = f"{context.symbol.value}_RPC_URL"
        env_url = os.environ.get(env_var)
        if env_url:
            logger.debug(f"Using RPC URL from {env_var}")
            return env_url

        if context.rpc:
            return context.rpc
        raise ValueError(f"No RPC URL for {context.symbol.value}; set {env_var} or pass an override")
