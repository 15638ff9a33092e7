"""
Exceptions for the ERC-7806 SDK.
"""
from typing import Optional


class ERC7806Error(Exception):
    """Base exception for all SDK errors."""
    pass


class ValidationError(ERC7806Error, ValueError):
    """Raised when an action is missing required fields or has an unknown type."""
    pass


class EncodingInvariantViolation(ERC7806Error, ValueError):
    """Raised when a value does not fit its fixed-width slot or a frame is malformed."""
    pass


class SigningError(ERC7806Error):
    """Raised when the signer capability rejects or fails a signing request."""
    pass


class ChainCallError(ERC7806Error):
    """Raised when a read or write against the chain fails."""
    pass


class RelayApiError(ERC7806Error):
    """Raised when the relay submission service returns an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
