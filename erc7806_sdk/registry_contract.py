"""
StandardRegistryClient - contract calls against a StandardRegistry deployment.
"""
import logging
import secrets
import urllib.parse
from typing import Any, Dict, Optional, Union

from web3 import Web3

from .config import NetworkConfig, NetworkKey
from .exceptions import ChainCallError, SigningError
from .models import ContractCallResult, RegistrationStatus
from .utils import to_bytes, to_checksum, to_hex


class StandardRegistryClient:
    """
    Client for the StandardRegistry contract.

    Reads (``isRegistered``) need only a provider; writes (``update``,
    ``permit``) also need a signer able to sign transactions. Failures are
    returned in the result objects rather than raised, and nothing is
    retried.
    """

    STANDARD_REGISTRY_ABI = [
        {
            "inputs": [
                {"internalType": "bool", "name": "registering", "type": "bool"},
                {"internalType": "address", "name": "standard", "type": "address"},
                {"internalType": "uint256", "name": "nonce", "type": "uint256"}
            ],
            "name": "update",
            "outputs": [],
            "stateMutability": "nonpayable",
            "type": "function"
        },
        {
            "inputs": [
                {"internalType": "address", "name": "signer", "type": "address"},
                {"internalType": "address", "name": "standard", "type": "address"}
            ],
            "name": "isRegistered",
            "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
            "stateMutability": "view",
            "type": "function"
        },
        {
            "inputs": [
                {"internalType": "bool", "name": "registering", "type": "bool"},
                {"internalType": "address", "name": "signer", "type": "address"},
                {"internalType": "address", "name": "standard", "type": "address"},
                {"internalType": "uint256", "name": "nonce", "type": "uint256"},
                {"internalType": "bytes", "name": "signature", "type": "bytes"}
            ],
            "name": "permit",
            "outputs": [],
            "stateMutability": "nonpayable",
            "type": "function"
        }
    ]

    def __init__(
        self,
        registry_address: str,
        rpc_url: Optional[str] = None,
        w3: Optional[Web3] = None,
        signer: Optional[Any] = None,
        receipt_timeout: int = 120,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the StandardRegistryClient

        Args:
            registry_address: StandardRegistry contract address
            rpc_url: Ethereum RPC endpoint URL (ignored when w3 is given)
            w3: Pre-built Web3 instance
            signer: Signer for state-changing calls (optional for reads)
            receipt_timeout: Seconds to wait for a transaction receipt
            logger: Optional logger instance to use for debug/info logging

        Raises:
            ValueError: If neither rpc_url nor w3 is provided
            ValueError: If the URL doesn't use https (unless it's localhost/127.0.0.1)
        """
        if w3 is None and not rpc_url:
            raise ValueError("Either rpc_url or w3 must be provided")

        if w3 is None:
            parsed = urllib.parse.urlparse(rpc_url)
            host = parsed.netloc.split(':')[0]
            is_local = host in ('localhost', '127.0.0.1')
            if parsed.scheme != 'https' and not is_local:
                raise ValueError(f"rpc_url must use https:// for security (got: {parsed.scheme}://)")
            w3 = Web3(Web3.HTTPProvider(rpc_url))

        self.registry_address = to_checksum(registry_address)
        self.w3 = w3
        self.signer = signer
        self.receipt_timeout = receipt_timeout
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_network(
        cls,
        network: NetworkKey,
        signer: Optional[Any] = None,
        rpc_url: Optional[str] = None,
        **kwargs
    ) -> "StandardRegistryClient":
        """
        Create a client for the StandardRegistry deployed on a known network.

        Args:
            network: Network symbol, e.g. "ETH_SEPOLIA"
            signer: Signer for state-changing calls
            rpc_url: RPC URL override
        """
        return cls(
            registry_address=NetworkConfig.get_standard_registry_address(network),
            rpc_url=NetworkConfig.get_rpc_url(network, override=rpc_url),
            signer=signer,
            **kwargs
        )

    def get_contract(self):
        """
        Get the StandardRegistry contract instance

        Raises:
            ChainCallError: If the client has no usable Web3 provider
        """
        if not isinstance(self.w3, Web3):
            raise ChainCallError(f"Invalid provider: expected Web3, got {type(self.w3).__name__}")
        return self.w3.eth.contract(address=self.registry_address, abi=self.STANDARD_REGISTRY_ABI)

    def is_registered(self, signer_address: str, standard_address: str) -> RegistrationStatus:
        """
        Check if a standard is registered for a signer

        Returns:
            RegistrationStatus; ``error`` is set when the lookup failed
        """
        try:
            contract = self.get_contract()
            registered = contract.functions.isRegistered(
                to_checksum(signer_address),
                to_checksum(standard_address)
            ).call()
            return RegistrationStatus(is_registered=bool(registered))
        except Exception as e:
            self.logger.error(f"Failed to check standard registration: {e}")
            return RegistrationStatus(is_registered=False, error=str(e) or type(e).__name__)

    def update(
        self,
        registering: bool,
        standard_address: str,
        nonce: Optional[int] = None
    ) -> ContractCallResult:
        """
        Register or unregister a standard with a direct transaction

        Args:
            registering: True to register, False to unregister
            standard_address: The standard contract
            nonce: Registry nonce (random when omitted)
        """
        if nonce is None:
            nonce = secrets.randbelow(10**18)
        return self._transact(
            "update",
            lambda contract: contract.functions.update(
                registering, to_checksum(standard_address), nonce
            )
        )

    def register_standard(self, standard_address: str, nonce: Optional[int] = None) -> ContractCallResult:
        return self.update(True, standard_address, nonce)

    def unregister_standard(self, standard_address: str, nonce: Optional[int] = None) -> ContractCallResult:
        return self.update(False, standard_address, nonce)

    def permit(
        self,
        registering: bool,
        signer_address: str,
        standard_address: str,
        nonce: int,
        signature: Union[str, bytes]
    ) -> ContractCallResult:
        """
        Register or unregister a standard on behalf of ``signer_address``
        using its signed Permission (gasless for the permit signer)
        """
        return self._transact(
            "permit",
            lambda contract: contract.functions.permit(
                registering,
                to_checksum(signer_address),
                to_checksum(standard_address),
                nonce,
                to_bytes(signature)
            )
        )

    def _transact(self, name: str, build_call) -> ContractCallResult:
        """
        Build, sign, send and await one registry transaction.

        Every failure is logged and returned as an unsuccessful result.
        """
        try:
            if self.signer is None:
                raise ChainCallError(f"A signer is required to send {name} transactions")

            contract = self.get_contract()
            call = build_call(contract)
            from_address = self.signer.address
            tx_params: Dict[str, Any] = {
                'from': from_address,
                'nonce': self.w3.eth.get_transaction_count(from_address),
            }
            tx = call.build_transaction(tx_params)

            try:
                signed_tx = self.signer.sign_transaction(tx)
            except Exception as e:
                raise SigningError(f"Failed to sign transaction: {str(e)}") from e

            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
            tx_hash_hex = to_hex(tx_hash)
            self.logger.info(f"{name} transaction sent: {tx_hash_hex}")

            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
            if receipt.get('status') == 0:
                raise ChainCallError(f"Transaction {tx_hash_hex} reverted")

            return ContractCallResult(success=True, transaction_hash=tx_hash_hex)
        except Exception as e:
            self.logger.error(f"Failed to {name} standard registration: {e}")
            return ContractCallResult(success=False, error=str(e) or type(e).__name__)
