"""
Authentication module.

Provides the Azure credential used for blob storage access.

Components:
    - StaticTokenCredential: Pre-acquired storage bearer token
    - create_storage_credential(): Bearer token or env/CLI/managed identity chain
"""

from .credentials import (
    STORAGE_SCOPE,
    StaticTokenCredential,
    create_storage_credential,
    credential_mode,
)

__all__ = [
    "STORAGE_SCOPE",
    "StaticTokenCredential",
    "create_storage_credential",
    "credential_mode",
]
