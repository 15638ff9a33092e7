"""
Signer capability used for intents, permits and registry transactions.
"""
from typing import Any, Dict, Protocol, runtime_checkable

from eth_account.messages import SignableMessage

from .local import LocalSigner


@runtime_checkable
class Signer(Protocol):
    """
    Protocol for custom signers.

    ``eth_account`` local accounts satisfy it as-is, so an ``Account.from_key``
    object can be passed wherever a Signer is expected.
    """
    address: str

    def sign_message(self, signable_message: SignableMessage) -> Any:
        """Sign an EIP-191 message and return an object with a ``signature``"""
        ...

    def sign_typed_data(
        self,
        domain_data: Dict[str, Any],
        message_types: Dict[str, Any],
        message_data: Dict[str, Any],
    ) -> Any:
        """Sign EIP-712 typed data and return an object with a ``signature``"""
        ...

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> Any:
        """Sign transaction and return signed tx object"""
        ...


__all__ = ["Signer", "LocalSigner"]
