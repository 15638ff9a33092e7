"""
ERC-7806 SDK - StandardRegistry permits and RelayedExecutionStandard intents.
"""
from .version import __version__
from .actions import (
    action_to_call,
    decode_action,
    encode_action,
    encode_erc20_transfer_call,
    encode_general_execution,
    encode_transfer_erc20,
    encode_transfer_eth,
    parse_action,
)
from .config import NetworkConfig
from .exceptions import (
    ChainCallError,
    EncodingInvariantViolation,
    ERC7806Error,
    RelayApiError,
    SigningError,
    ValidationError,
)
from .intent import (
    build_relay_execution_intent,
    decode_relay_execution_intent,
    recover_relay_execution_intent_signer,
    verify_relay_execution_intent,
)
from .models import (
    ActionCall,
    BlockchainContext,
    BlockchainEnum,
    ContractCallResult,
    DecodedIntent,
    GeneralExecution,
    IntentScheme,
    RegistrationStatus,
    RelayRequestStatus,
    SigningResult,
    StandardRegistryDomain,
    StandardRegistryPermission,
    TransferErc20,
    TransferEth,
)
from .registry_contract import StandardRegistryClient
from .relay_api import RelayApiClient
from .signer import LocalSigner, Signer
from .standard_registry import (
    STANDARD_REGISTRY_TYPES,
    StandardRegistrySDK,
    create_standard_registry_domain,
    generate_nonce,
    get_standard_registry_typed_data_hash,
    recover_standard_registry_signer,
    sign_standard_registry_permission,
)

__all__ = [
    "__version__",
    # Actions
    "TransferEth",
    "TransferErc20",
    "GeneralExecution",
    "ActionCall",
    "parse_action",
    "encode_action",
    "encode_transfer_eth",
    "encode_transfer_erc20",
    "encode_general_execution",
    "encode_erc20_transfer_call",
    "decode_action",
    "action_to_call",
    # Relay intents
    "IntentScheme",
    "DecodedIntent",
    "build_relay_execution_intent",
    "decode_relay_execution_intent",
    "recover_relay_execution_intent_signer",
    "verify_relay_execution_intent",
    # StandardRegistry
    "STANDARD_REGISTRY_TYPES",
    "StandardRegistrySDK",
    "StandardRegistryDomain",
    "StandardRegistryPermission",
    "SigningResult",
    "create_standard_registry_domain",
    "generate_nonce",
    "get_standard_registry_typed_data_hash",
    "sign_standard_registry_permission",
    "recover_standard_registry_signer",
    "StandardRegistryClient",
    "ContractCallResult",
    "RegistrationStatus",
    # Relay service
    "RelayApiClient",
    "RelayRequestStatus",
    # Networks
    "NetworkConfig",
    "BlockchainContext",
    "BlockchainEnum",
    # Signers
    "Signer",
    "LocalSigner",
    # Errors
    "ERC7806Error",
    "ValidationError",
    "EncodingInvariantViolation",
    "SigningError",
    "ChainCallError",
    "RelayApiError",
]
