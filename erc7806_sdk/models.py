"""
Data models for the ERC-7806 SDK.
"""
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils import UINT256_MAX, is_zero_address, to_bytes, to_checksum


def _checksum(value: Any) -> Any:
    if value is None:
        return value
    return to_checksum(value)


# ─────────────────────────────────────────────────────────────────────────
#  Actions
# ─────────────────────────────────────────────────────────────────────────

class _ActionBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class TransferEth(_ActionBase):
    """Send native ETH to a receiver"""
    type: Literal["TRANSFER_ETH"] = "TRANSFER_ETH"
    receiver: str
    amount: int = Field(..., ge=0, le=UINT256_MAX)

    @field_validator("receiver", mode="before")
    @classmethod
    def checksum_receiver(cls, value: Any) -> Any:
        return _checksum(value)


class TransferErc20(_ActionBase):
    """Send ERC-20 tokens to a receiver"""
    type: Literal["TRANSFER_ERC20"] = "TRANSFER_ERC20"
    receiver: str
    amount: int = Field(..., ge=0, le=UINT256_MAX)
    token_address: str = Field(..., alias="tokenAddress")

    @field_validator("receiver", "token_address", mode="before")
    @classmethod
    def checksum_addresses(cls, value: Any) -> Any:
        return _checksum(value)


class GeneralExecution(_ActionBase):
    """Call an arbitrary contract with optional ETH value"""
    type: Literal["GENERAL_EXECUTION"] = "GENERAL_EXECUTION"
    target_address: str = Field(..., alias="targetAddress")
    amount: Optional[int] = Field(None, ge=0, le=UINT256_MAX)
    calldata: bytes

    @field_validator("target_address", mode="before")
    @classmethod
    def checksum_target(cls, value: Any) -> Any:
        return _checksum(value)

    @field_validator("calldata", mode="before")
    @classmethod
    def decode_calldata(cls, value: Any) -> Any:
        if isinstance(value, str):
            return to_bytes(value)
        return value

    @property
    def value(self) -> int:
        """ETH value sent with the call (0 when no amount was given)"""
        return self.amount or 0


Action = Annotated[
    Union[TransferEth, TransferErc20, GeneralExecution],
    Field(discriminator="type"),
]


class ActionCall(BaseModel):
    """The uniform (address, uint256, bytes) tuple every action encodes to"""
    model_config = ConfigDict(frozen=True)

    target: str
    value: int
    data: bytes


# ─────────────────────────────────────────────────────────────────────────
#  Relay intents
# ─────────────────────────────────────────────────────────────────────────

class IntentScheme(str, Enum):
    """
    How a relay intent is hashed and signed.

    RAW_HASH signs keccak256(abi.encode(body, contract, chainId)) as a personal
    message. TYPED_DATA signs the EIP-712 ``Intent`` struct under the
    RelayedExecutionStandard domain.
    """
    RAW_HASH = "raw_hash"
    TYPED_DATA = "typed_data"


class DecodedIntent(BaseModel):
    """A relay intent frame split back into its fields"""
    model_config = ConfigDict(frozen=True)

    scheme: IntentScheme
    signer: str
    verifying_contract: str
    expiration: int
    relayer: Optional[str] = None
    payment_token: str
    payment_amount: int
    actions: Tuple[ActionCall, ...]
    header: bytes
    instructions: bytes
    signature: bytes

    @property
    def body(self) -> bytes:
        """The signed header+instructions payload"""
        return self.header + self.instructions


# ─────────────────────────────────────────────────────────────────────────
#  StandardRegistry
# ─────────────────────────────────────────────────────────────────────────

class StandardRegistryDomain(BaseModel):
    """EIP-712 domain of a StandardRegistry deployment"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = "StandardRegistry"
    version: str = "2"
    chain_id: int = Field(..., alias="chainId")
    verifying_contract: str = Field(..., alias="verifyingContract")

    @field_validator("verifying_contract", mode="before")
    @classmethod
    def checksum_contract(cls, value: Any) -> Any:
        return _checksum(value)

    def to_eip712(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class StandardRegistryPermission(BaseModel):
    """Permission struct signed to (un)register a standard"""
    model_config = ConfigDict(frozen=True)

    registering: bool
    standard: str
    nonce: int = Field(..., ge=0, le=UINT256_MAX)

    @field_validator("standard", mode="before")
    @classmethod
    def checksum_standard(cls, value: Any) -> Any:
        return _checksum(value)


class SigningResult(BaseModel):
    signature: str
    signer_address: str


class ContractCallResult(BaseModel):
    """Outcome of a state-changing registry call"""
    success: bool
    transaction_hash: Optional[str] = None
    error: Optional[str] = None


class RegistrationStatus(BaseModel):
    """Outcome of an isRegistered lookup"""
    is_registered: bool
    error: Optional[str] = None


# ─────────────────────────────────────────────────────────────────────────
#  Networks
# ─────────────────────────────────────────────────────────────────────────

class BlockchainEnum(str, Enum):
    UNKNOWN = "UNKNOWN"
    ETH = "ETH"
    ETH_SEPOLIA = "ETH_SEPOLIA"
    ODYSSEY = "ODYSSEY"
    OP_SEPOLIA = "OP_SEPOLIA"
    BASE_SEPOLIA = "BASE_SEPOLIA"


class BlockchainContext(BaseModel):
    """Deployment addresses and metadata for one network"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    symbol: BlockchainEnum
    chain_id: int = Field(..., alias="chainId")
    is_testnet: bool = Field(False, alias="isTestnet")
    explorer: str = ""
    rpc: Optional[str] = None
    standard_registry: Optional[str] = Field(None, alias="standardRegistry")
    account_implementation: Optional[str] = Field(None, alias="accountImplementation")
    relay_execution_standard: Optional[str] = Field(None, alias="relayExecutionStandard")

    @field_validator(
        "standard_registry", "account_implementation", "relay_execution_standard",
        mode="before",
    )
    @classmethod
    def deployment_address(cls, value: Any) -> Any:
        # "0x" marks a contract that is not deployed on this network
        if value in (None, "", "0x"):
            return None
        address = to_checksum(value)
        return None if is_zero_address(address) else address


# ─────────────────────────────────────────────────────────────────────────
#  Relay API
# ─────────────────────────────────────────────────────────────────────────

class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RelayRequestStatus(str, Enum):
    """Lifecycle states of a relay request on the relay service"""
    RECEIVED = "RECEIVED"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"
    SUBMITTED = "SUBMITTED"
    FAILED = "FAILED"
    CONFIRMED_ON_CHAIN = "CONFIRMED_ON_CHAIN"
    COMPLETE = "COMPLETE"


class UpgradeAccountRequest(_ApiModel):
    """Upgrade an EOA to an EIP-7702 account and register a standard"""
    sender: str
    signed_authorization: str = Field(..., alias="signedAuthorization")
    registering: Optional[bool] = None
    standard: str
    nonce: str
    standard_registration_sig: str = Field(..., alias="standardRegistrationSig")


class CreateRelayRequest(_ApiModel):
    intent: Optional[str] = None


class CreateRelayResponse(_ApiModel):
    request_id: Optional[str] = Field(None, alias="requestId")
    status: Optional[str] = None
    message: Optional[str] = None


class GetRelayResponse(_ApiModel):
    id: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    user_id: Optional[str] = Field(None, alias="userId")
    blockchain: Optional[BlockchainEnum] = None
    payment_token_address: Optional[str] = Field(None, alias="paymentTokenAddress")
    payment_amount: Optional[int] = Field(None, alias="paymentAmount")
    intent: Optional[str] = None
    state: Optional[RelayRequestStatus] = None
    transaction_hash: Optional[str] = Field(None, alias="transactionHash")
    provider_transaction_id: Optional[str] = Field(None, alias="providerTransactionId")
    error_reason: Optional[str] = Field(None, alias="errorReason")
