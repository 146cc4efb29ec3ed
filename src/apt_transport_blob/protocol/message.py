"""
APT method protocol messages.

A message is a numbered first line followed by "Key: Value" header lines
and a terminating blank line:

    600 URI Acquire
    URI: https://account.blob.core.windows.net/container/path/to/object
    Filename: /tmp/object

Message.from_bytes() parses exactly one such block; Message.to_bytes()
produces the only textual form this method ever writes.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple

from core.errors import (
    HeaderNotFoundError,
    MessageParseError,
    MessageTooMuchDataError,
    UnknownMessageTypeError,
)

_CODE_PATTERN = re.compile(rb"[0-9]+")

Header = Tuple[str, str]


class MessageType(Enum):
    """
    Message types understood by this method.

    Each value is a (code, description) pair; the code is what appears on
    the wire, the description is the text written after it.
    """

    CAPABILITIES = (100, "Capabilities")
    LOG = (101, "Log")
    STATUS = (102, "Status")
    URI_START = (200, "URI Start")
    URI_DONE = (201, "URI Done")
    URI_FAILURE = (400, "URI Failure")
    GENERAL_FAILURE = (401, "General Failure")
    URI_ACQUIRE = (600, "URI Acquire")
    CONFIGURATION = (601, "Configuration")

    @property
    def code(self) -> int:
        return self.value[0]

    @property
    def description(self) -> str:
        return self.value[1]

    @classmethod
    def from_code(cls, code: str) -> "MessageType":
        """
        Resolve the digit string from a message's first line.

        Raises:
            UnknownMessageTypeError: If no message type has this code
        """
        try:
            return _TYPES_BY_CODE[code]
        except KeyError:
            raise UnknownMessageTypeError(code) from None


_TYPES_BY_CODE: Dict[str, MessageType] = {
    str(message_type.code): message_type for message_type in MessageType
}


def _single_line(text: str) -> str:
    """Collapse multi-line text (e.g. SDK error output) onto one line."""
    return " ".join(part.strip() for part in text.splitlines() if part.strip())


@dataclass
class Message:
    """A message type plus ordered headers. Keys may repeat."""

    message_type: MessageType
    headers: List[Header] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.headers = [(str(key), str(value)) for key, value in self.headers]
        for key, value in self.headers:
            if ":" in key or "\n" in key:
                raise ValueError(f"Invalid header key: {key!r}")
            if "\n" in value:
                raise ValueError(f"Header value for {key!r} contains a newline")
            # Spaces after the colon are separator, not value
            if value.startswith(" "):
                raise ValueError(f"Header value for {key!r} starts with a space")

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def capabilities(cls, version: str) -> "Message":
        return cls(
            MessageType.CAPABILITIES,
            [
                ("Version", version),
                ("Send-Config", "true"),
                ("Single-Instance", "true"),
            ],
        )

    @classmethod
    def status(cls, text: str) -> "Message":
        return cls(MessageType.STATUS, [("Message", _single_line(text))])

    @classmethod
    def general_failure(cls, text: str) -> "Message":
        return cls(MessageType.GENERAL_FAILURE, [("Message", _single_line(text))])

    @classmethod
    def uri_start(cls, uri: str, size: int, last_modified: str) -> "Message":
        return cls(
            MessageType.URI_START,
            [("URI", uri), ("Size", str(size)), ("Last-Modified", last_modified)],
        )

    @classmethod
    def uri_failure(cls, uri: str, text: str) -> "Message":
        return cls(
            MessageType.URI_FAILURE, [("URI", uri), ("Message", _single_line(text))]
        )

    @classmethod
    def uri_done(cls, uri: str, filename: str) -> "Message":
        return cls(MessageType.URI_DONE, [("URI", uri), ("Filename", filename)])

    # ------------------------------------------------------------------
    # Header access
    # ------------------------------------------------------------------

    def header(self, key: str) -> str:
        """
        Return the value of the first header named key.

        Raises:
            HeaderNotFoundError: If no header has this key
        """
        for header_key, value in self.headers:
            if header_key == key:
                return value
        raise HeaderNotFoundError(key)

    def uri(self) -> str:
        return self.header("URI")

    def filename(self) -> str:
        return self.header("Filename")

    def description(self) -> str:
        """First line of the message without its newline, e.g. "600 URI Acquire"."""
        return f"{self.message_type.code} {self.message_type.description}"

    # ------------------------------------------------------------------
    # Wire format
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        lines = [self.description()]
        lines.extend(f"{key}: {value}" for key, value in self.headers)
        return "\n".join(lines) + "\n\n"

    def to_bytes(self) -> bytes:
        return str(self).encode("utf-8")

    @classmethod
    def from_bytes(cls, data: bytes) -> "Message":
        """
        Parse exactly one message.

        Raises:
            MessageParseError: If the grammar is violated
            UnknownMessageTypeError: If the code is not a known message type
            MessageTooMuchDataError: If bytes follow the terminating blank line
        """
        message_type, pos = _parse_first_line(data)

        headers: List[Header] = []
        while True:
            end = data.find(b"\n", pos)
            if end == -1:
                if pos >= len(data):
                    raise MessageParseError("missing terminating blank line")
                raise MessageParseError("unterminated header line")

            line = data[pos:end]
            pos = end + 1
            if not line:
                break
            headers.append(_parse_header(line))

        if pos < len(data):
            raise MessageTooMuchDataError(len(data) - pos)

        return cls(message_type, headers)


def _parse_first_line(data: bytes) -> Tuple[MessageType, int]:
    """Return the message type and the offset just past the first line."""
    match = _CODE_PATTERN.match(data)
    if match is None:
        raise MessageParseError("expected numeric message code")

    end = data.find(b"\n", match.end())
    if end == -1:
        raise MessageParseError("missing newline after message code")

    # The description after the code is free text and is not checked
    return MessageType.from_code(match.group().decode("ascii")), end + 1


def _parse_header(line: bytes) -> Header:
    key, sep, value = line.partition(b":")
    if not sep:
        raise MessageParseError(f"header line without ':': {line[:80]!r}")
    try:
        return key.decode("utf-8"), value.lstrip(b" ").decode("utf-8")
    except UnicodeDecodeError as e:
        raise MessageParseError("header is not valid UTF-8", cause=e) from e
