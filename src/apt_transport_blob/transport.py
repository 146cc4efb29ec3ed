"""
Transport framing loop.

Reads the controller's input line by line. A line consisting of a single
newline closes the current message block, which is parsed and handed to
the Processor before the next line is read.
"""

import asyncio
import logging
from typing import BinaryIO

from apt_transport_blob.processor import Processor
from apt_transport_blob.protocol.message import Message
from apt_transport_blob.protocol.writer import MessageWriter
from core.errors import MessageError
from core.logging.setup import get_logger
from core.logging.utilities import log_exception

logger = get_logger(__name__)

BLANK_LINE = b"\n"


class MethodTransport:
    """
    Runs the method protocol over a pair of streams.

    Usage:
        transport = MethodTransport(processor, writer, version=__version__)
        await transport.run(sys.stdin.buffer)
    """

    def __init__(self, processor: Processor, writer: MessageWriter, version: str):
        self.processor = processor
        self.writer = writer
        self.version = version

    async def run(self, stream: BinaryIO) -> None:
        """
        Send capabilities, then process messages until end of input.

        Unparseable messages are logged and dropped. An exception from the
        processor is reported as a General Failure and re-raised.
        """
        self.writer.send_capabilities(self.version)
        logger.info("Ready to receive messages")

        buffer = bytearray()
        while True:
            line = await asyncio.to_thread(stream.readline)
            if not line:
                logger.debug("EOF reached")
                if buffer:
                    logger.debug(f"Discarding {len(buffer)} bytes of partial message")
                return

            buffer.extend(line)

            if line != BLANK_LINE:
                continue

            logger.info("Empty line reached, process message")
            try:
                await self._handle_block(bytes(buffer))
            finally:
                buffer.clear()

    async def _handle_block(self, block: bytes) -> None:
        try:
            message = Message.from_bytes(block)
        except MessageError as e:
            log_exception(logger, e, "Dropping message", level=logging.INFO)
            return

        try:
            await self.processor.process(message)
        except Exception as e:
            log_exception(logger, e, f"Error processing {message.description()}")
            self.writer.send_general_failure(f"Error: {e}")
            raise

        logger.info("Message processed successfully")
