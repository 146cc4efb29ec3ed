"""
Storage collaborators.

Components:
    - BlobStore / BlobHandle / FileWriter: collaborator protocols
    - storage.azure.AzureBlobStore: Azure Blob Storage over azure.storage.blob.aio
    - LocalFileWriter: writes downloaded content with aiofiles
    - parse_url / BlobLocation: URL to account, container and blob name
"""

from .base import (
    BlobHandle,
    BlobProperties,
    BlobStore,
    FileWriter,
)
from .files import LocalFileWriter
from .url import BlobLocation, parse_url

__all__ = [
    "BlobHandle",
    "BlobProperties",
    "BlobStore",
    "FileWriter",
    "LocalFileWriter",
    "BlobLocation",
    "parse_url",
]
