"""Protocols for the blob-store and file-system collaborators."""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable
from urllib.parse import SplitResult


@dataclass(frozen=True)
class BlobProperties:
    """Metadata sent to the controller in URI Start."""

    size: int
    last_modified: str


@runtime_checkable
class BlobHandle(Protocol):
    """
    A single remote object.

    Implementations raise plain exceptions on failure; callers do not
    distinguish error types.
    """

    async def exists(self) -> bool:
        ...

    async def properties(self) -> BlobProperties:
        ...

    async def download(self) -> bytes:
        ...


@runtime_checkable
class BlobStore(Protocol):
    """Resolves URLs to blob handles."""

    def get_blob(self, url: SplitResult) -> BlobHandle:
        ...


@runtime_checkable
class FileWriter(Protocol):
    """Persists downloaded content to a local path."""

    async def write(self, path: str, data: bytes) -> None:
        ...
