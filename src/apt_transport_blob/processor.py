"""
Inbound message processing.

The Processor dispatches messages by type. URI Acquire runs the acquisition
sequence; every failure after the URI header has been read becomes a
URI Failure message instead of an exception.
"""

import logging
from typing import Optional

from apt_transport_blob.protocol.message import Message, MessageType
from apt_transport_blob.protocol.writer import MessageWriter
from apt_transport_blob.storage.base import BlobStore, FileWriter
from apt_transport_blob.storage.files import LocalFileWriter
from apt_transport_blob.storage.url import parse_url
from core.logging.context import log_context
from core.logging.setup import get_logger
from core.logging.utilities import log_exception, log_with_context
from core.security import sanitize_url

logger = get_logger(__name__)

WAITING_FOR_HEADERS = "Waiting for headers"
BLOB_DOES_NOT_EXIST = "Blob does not exist"


def build_failure(uri: str, error: BaseException) -> Message:
    """Map any acquisition error to a URI Failure for uri."""
    log_exception(
        logger,
        error,
        f"URI failure for {sanitize_url(uri)}: {error}",
        level=logging.ERROR,
        include_traceback=False,
        uri=uri,
    )
    return Message.uri_failure(uri, f"Error: {error}")


class Processor:
    """
    Handles one inbound message at a time.

    Holds the blob store, the file writer and the message writer for the
    lifetime of the process; keeps no per-request state.
    """

    def __init__(
        self,
        blob_store: BlobStore,
        writer: MessageWriter,
        file_writer: Optional[FileWriter] = None,
    ):
        self.blob_store = blob_store
        self.writer = writer
        self.file_writer = file_writer or LocalFileWriter()

    async def process(self, message: Message) -> None:
        """
        Dispatch a message by type.

        Raises:
            HeaderNotFoundError: If a URI Acquire message has no URI header
        """
        logger.debug(f"Handling message: {message.description()}")

        with log_context(message_type=message.description()):
            if message.message_type is MessageType.CONFIGURATION:
                # Nothing is configurable yet
                logger.info("Configuration message received")
            elif message.message_type is MessageType.URI_ACQUIRE:
                logger.info("URI Acquire message received")
                self.writer.send_status(WAITING_FOR_HEADERS)
                response = await self.uri_acquire(message)
                self.writer.send(response)
            else:
                logger.warning(f"Unhandled message type: {message.description()}")

    async def uri_acquire(self, message: Message) -> Message:
        """
        Fetch the blob named by URI into Filename.

        Sends URI Start as soon as blob metadata is known and returns
        URI Done on success or URI Failure on any error.

        Raises:
            HeaderNotFoundError: If the message has no URI header
        """
        # A missing URI breaks the method interface and cannot be answered
        uri = message.uri()

        with log_context(uri=uri):
            try:
                return await self._acquire(uri, message)
            except Exception as e:
                return build_failure(uri, e)

    async def _acquire(self, uri: str, message: Message) -> Message:
        filename = message.filename()
        log_with_context(
            logger,
            logging.INFO,
            f"Acquiring URI: {sanitize_url(uri)} -> {filename}",
            target_path=filename,
        )

        url = parse_url(uri)
        blob = self.blob_store.get_blob(url)
        logger.debug(f"Blob handle: {blob!r}")

        if not await blob.exists():
            logger.warning("Blob doesn't exist")
            return Message.uri_failure(uri, BLOB_DOES_NOT_EXIST)

        properties = await blob.properties()
        log_with_context(
            logger,
            logging.INFO,
            "Blob properties",
            size=properties.size,
            last_modified=properties.last_modified,
        )

        self.writer.send_uri_start(uri, properties.size, properties.last_modified)

        contents = await blob.download()
        log_with_context(
            logger, logging.INFO, "Downloaded blob", bytes_written=len(contents)
        )

        await self.file_writer.write(filename, contents)

        return Message.uri_done(uri, filename)
