"""Outbound message writer for the method's standard output."""

import logging
from typing import BinaryIO

from apt_transport_blob.protocol.message import Message
from core.logging.setup import get_logger
from core.logging.utilities import log_with_context

logger = get_logger(__name__)


class MessageWriter:
    """
    Single writer of the protocol output stream.

    Every message is flushed as soon as it is written so the controller sees
    progress (Status, URI Start) before long-running work finishes.
    """

    def __init__(self, stream: BinaryIO):
        self._stream = stream

    def send(self, message: Message) -> None:
        self._stream.write(message.to_bytes())
        self._stream.flush()
        log_with_context(logger, logging.DEBUG, f"Sent {message.description()}")

    def send_capabilities(self, version: str) -> None:
        self.send(Message.capabilities(version))

    def send_status(self, text: str) -> None:
        self.send(Message.status(text))

    def send_general_failure(self, text: str) -> None:
        self.send(Message.general_failure(text))

    def send_uri_start(self, uri: str, size: int, last_modified: str) -> None:
        self.send(Message.uri_start(uri, size, last_modified))
