"""
Exception hierarchy for the blob transport.

Provides:
- TransportError base with message, cause and context
- Codec errors (parse, unknown type, trailing data, missing header)
- Storage and configuration errors
"""

from .exceptions import (
    # Base classes
    TransportError,
    MessageError,
    # Codec errors
    MessageParseError,
    UnknownMessageTypeError,
    MessageTooMuchDataError,
    HeaderNotFoundError,
    # Storage errors
    BlobStoreError,
    BlobUrlError,
    # Configuration errors
    ConfigurationError,
)

__all__ = [
    # Base classes
    "TransportError",
    "MessageError",
    # Codec errors
    "MessageParseError",
    "UnknownMessageTypeError",
    "MessageTooMuchDataError",
    "HeaderNotFoundError",
    # Storage errors
    "BlobStoreError",
    "BlobUrlError",
    # Configuration errors
    "ConfigurationError",
]
