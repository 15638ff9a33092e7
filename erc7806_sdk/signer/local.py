"""
Private-key backed signer.
"""
from typing import Any, Dict

from eth_account import Account
from eth_account.messages import SignableMessage
from eth_account.signers.local import LocalAccount


class LocalSigner:
    """Signer holding a secp256k1 private key in memory"""

    def __init__(self, private_key: str):
        self._account: LocalAccount = Account.from_key(private_key)

    @property
    def address(self) -> str:
        return self._account.address

    def sign_message(self, signable_message: SignableMessage) -> Any:
        return self._account.sign_message(signable_message)

    def sign_typed_data(
        self,
        domain_data: Dict[str, Any],
        message_types: Dict[str, Any],
        message_data: Dict[str, Any],
    ) -> Any:
        return self._account.sign_typed_data(domain_data, message_types, message_data)

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> Any:
        return self._account.sign_transaction(transaction_dict)

    def __repr__(self) -> str:
        return f"LocalSigner(address={self.address})"
