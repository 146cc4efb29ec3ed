"""
Azure Blob Storage implementation of the blob-store collaborator.

One credential is shared by every request in the process, and one
BlobServiceClient is kept per storage account so blob clients reuse its
HTTP transport.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional
from urllib.parse import SplitResult

from azure.storage.blob.aio import BlobClient, BlobServiceClient

from apt_transport_blob.storage.base import BlobProperties
from apt_transport_blob.storage.url import BlobLocation
from core.auth import create_storage_credential, credential_mode
from core.logging.decorators import LoggedClass


def format_last_modified(value: datetime) -> str:
    """Render a blob timestamp as ISO-8601 UTC, e.g. 2021-01-01T00:00:00Z."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class AzureBlob(LoggedClass):
    """Handle to one blob, bound to a BlobClient."""

    log_component = "azure"

    def __init__(self, location: BlobLocation, client: BlobClient):
        self.account = location.account
        self.container = location.container
        self.blob_name = location.blob_name
        self._client = client
        super().__init__()

    def __repr__(self) -> str:
        return (
            f"AzureBlob(account={self.account!r}, container={self.container!r}, "
            f"blob_name={self.blob_name!r})"
        )

    async def exists(self) -> bool:
        exists = await self._client.exists()
        self._log(logging.DEBUG, f"Blob exists: {exists}")
        return exists

    async def properties(self) -> BlobProperties:
        props = await self._client.get_blob_properties()
        return BlobProperties(
            size=props.size,
            last_modified=format_last_modified(props.last_modified),
        )

    async def download(self) -> bytes:
        downloader = await self._client.download_blob()
        contents = await downloader.readall()
        self._log(logging.DEBUG, "Blob downloaded", size=len(contents))
        return contents


class AzureBlobStore(LoggedClass):
    """
    Blob store backed by azure.storage.blob.aio.

    Usage:
        async with AzureBlobStore.from_bearer_token(token) as store:
            blob = store.get_blob(parse_url(uri))
            if await blob.exists():
                contents = await blob.download()
    """

    log_component = "azure"

    def __init__(
        self,
        credential: Any,
        service_client_factory: Callable[..., BlobServiceClient] = BlobServiceClient,
    ):
        """
        Args:
            credential: Async token credential used for every account
            service_client_factory: BlobServiceClient constructor (replaceable in tests)
        """
        self._credential = credential
        self._service_client_factory = service_client_factory
        self._service_clients: Dict[str, BlobServiceClient] = {}
        super().__init__()
        self._log(
            logging.DEBUG,
            "Blob store created",
            auth_mode=credential_mode(credential),
        )

    @classmethod
    def from_bearer_token(cls, bearer_token: Optional[str] = None) -> "AzureBlobStore":
        """Build a store with a static bearer token, or the credential chain if None."""
        return cls(create_storage_credential(bearer_token))

    def _service_client(self, account_url: str) -> BlobServiceClient:
        client = self._service_clients.get(account_url)
        if client is None:
            client = self._service_client_factory(
                account_url, credential=self._credential
            )
            self._service_clients[account_url] = client
        return client

    def get_blob(self, url: SplitResult) -> AzureBlob:
        """
        Resolve a URL to a blob handle.

        Raises:
            BlobUrlError: If the URL does not name an account and container
        """
        location = BlobLocation.from_url(url)
        service = self._service_client(location.account_url)
        client = service.get_blob_client(location.container, location.blob_name)
        blob = AzureBlob(location, client)
        self._log(logging.DEBUG, f"Resolved {blob!r}")
        return blob

    async def close(self) -> None:
        for client in self._service_clients.values():
            await client.close()
        self._service_clients.clear()
        await self._credential.close()

    async def __aenter__(self) -> "AzureBlobStore":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
