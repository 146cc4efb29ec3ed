"""
Azure credential construction for blob storage access.

Two modes:
- Bearer token: AZURE_STORAGE_BEARER_TOKEN holds a token already scoped to
  storage.azure.com. It takes priority over any user credential.
- Chained: environment service principal, then Azure CLI, then managed
  identity. Azure CLI is tried before managed identity so local operation
  does not wait on the IMDS endpoint.
"""

import logging
import time
from typing import Any, Optional, Union

from azure.core.credentials import AccessToken
from azure.identity.aio import (
    AzureCliCredential,
    ChainedTokenCredential,
    EnvironmentCredential,
    ManagedIdentityCredential,
)

from core.logging.setup import get_logger
from core.logging.utilities import log_with_context

logger = get_logger(__name__)

STORAGE_SCOPE = "https://storage.azure.com/.default"

# Expiry reported for a static token. The real lifetime is unknown, so the
# SDK is told it stays valid for an hour and asks again after that.
STATIC_TOKEN_LIFETIME_SECS = 3600


class StaticTokenCredential:
    """Async token credential that always returns one pre-acquired token."""

    def __init__(self, token: str, lifetime_secs: int = STATIC_TOKEN_LIFETIME_SECS):
        if not token:
            raise ValueError("Bearer token must not be empty")
        self._token = token
        self._lifetime_secs = lifetime_secs

    async def get_token(self, *scopes: str, **kwargs: Any) -> AccessToken:
        return AccessToken(self._token, int(time.time()) + self._lifetime_secs)

    async def close(self) -> None:
        pass

    async def __aenter__(self) -> "StaticTokenCredential":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


StorageCredential = Union[StaticTokenCredential, ChainedTokenCredential]


def create_storage_credential(bearer_token: Optional[str] = None) -> StorageCredential:
    """
    Build the credential used for every blob request in this process.

    Args:
        bearer_token: Storage-scoped bearer token; None selects the chain

    Returns:
        Async credential accepted by azure.storage.blob.aio clients
    """
    if bearer_token:
        log_with_context(
            logger,
            logging.DEBUG,
            "Using storage bearer token",
            auth_mode="bearer_token",
        )
        return StaticTokenCredential(bearer_token)

    log_with_context(
        logger,
        logging.DEBUG,
        "Using token credentials",
        auth_mode="chained",
    )
    return ChainedTokenCredential(
        EnvironmentCredential(),
        AzureCliCredential(),
        ManagedIdentityCredential(),
    )


def credential_mode(credential: Any) -> str:
    """Return a short auth mode label for diagnostics."""
    if isinstance(credential, StaticTokenCredential):
        return "bearer_token"
    if isinstance(credential, ChainedTokenCredential):
        return "chained"
    return type(credential).__name__
