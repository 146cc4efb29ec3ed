"""
Blob URL parsing.

Requested URIs look like:

    blob://account.blob.core.windows.net/container/path/to/object
    https://account.blob.core.windows.net/container/path/to/object

The host names the storage account, the first path segment the container
and the remaining segments the blob name. Query strings and fragments are
ignored. Requests always go to the account's public HTTPS endpoint.
"""

from dataclasses import dataclass
from urllib.parse import SplitResult, unquote, urlsplit

from core.errors import BlobUrlError

BLOB_HOST_SUFFIX = ".blob.core.windows.net"


def parse_url(uri: str) -> SplitResult:
    """
    Parse an absolute URL.

    Raises:
        BlobUrlError: If the URI is not an absolute URL
    """
    try:
        parsed = urlsplit(uri)
    except ValueError as e:
        raise BlobUrlError(f"Invalid URL: {e}", cause=e) from e

    if not parsed.scheme:
        raise BlobUrlError("relative URL without a base")
    return parsed


@dataclass(frozen=True)
class BlobLocation:
    """Account, container and blob name addressed by a URL."""

    account: str
    container: str
    blob_name: str

    @property
    def account_url(self) -> str:
        return f"https://{self.account}{BLOB_HOST_SUFFIX}"

    @classmethod
    def from_url(cls, url: SplitResult) -> "BlobLocation":
        """
        Resolve a parsed URL to a blob location.

        Raises:
            BlobUrlError: If host or container is missing
        """
        host = url.hostname
        if not host:
            raise BlobUrlError("No host")
        segments = url.path[1:].split("/")
        container = unquote(segments[0])
        if not container:
            raise BlobUrlError("No container")

        account = host[: -len(BLOB_HOST_SUFFIX)] if host.endswith(BLOB_HOST_SUFFIX) else host
        blob_name = "/".join(unquote(segment) for segment in segments[1:])
        return cls(account=account, container=container, blob_name=blob_name)
