"""
Exception types for the blob transport.

Provides:
- TransportError base carrying message, cause and debugging context
- Message codec and header lookup errors
- Blob store and configuration errors
"""

from typing import Optional


class TransportError(Exception):
    """
    Base exception for all transport errors.

    Attributes:
        message: Human-readable error description
        cause: Original exception if wrapping
        context: Additional context dict for debugging
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        context: Optional[dict] = None,
    ):
        self.message = message
        self.cause = cause
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)


# =============================================================================
# Message Errors
# =============================================================================


class MessageError(TransportError):
    """Base class for protocol message errors."""

    pass


class MessageParseError(MessageError):
    """Inbound bytes do not follow the message grammar."""

    def __init__(self, detail: str, cause: Optional[Exception] = None):
        super().__init__(f"Failed to parse message: {detail}", cause)
        self.detail = detail


class UnknownMessageTypeError(MessageParseError):
    """First line carries a numeric code outside the known message types."""

    def __init__(self, code: str):
        super().__init__(f"Unknown message type: {code}")
        self.code = code


class MessageTooMuchDataError(MessageError):
    """A complete message was followed by more bytes."""

    def __init__(self, remaining: int = 0):
        super().__init__("Too much message data", context={"remaining": remaining})
        self.remaining = remaining


class HeaderNotFoundError(MessageError):
    """Requested header key is absent from a message."""

    def __init__(self, key: str):
        super().__init__(f"Header not found: {key}")
        self.key = key


# =============================================================================
# Storage Errors
# =============================================================================


class BlobStoreError(TransportError):
    """Blob store operation failed."""

    pass


class BlobUrlError(BlobStoreError):
    """URL cannot be resolved to an account, container and blob."""

    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(TransportError):
    """Invalid configuration."""

    pass
