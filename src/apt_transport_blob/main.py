"""
Entry point for the blob APT method.

APT starts the method with no arguments and talks to it over stdin/stdout:

    /usr/lib/apt/methods/blob

For local debugging, logs can be redirected and mirrored to stderr:

    BLOB_TRANSPORT_CONSOLE_LOG_LEVEL=INFO blob --log-file ./blob.log < request.txt

Exit codes:
    0: end of input reached
    1: fatal protocol error (a General Failure was sent)
    2: invalid configuration or log file not writable
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import BinaryIO, List, Optional

from dotenv import load_dotenv

from apt_transport_blob import __version__
from apt_transport_blob.config import TransportConfig
from apt_transport_blob.processor import Processor
from apt_transport_blob.protocol.writer import MessageWriter
from apt_transport_blob.storage.azure import AzureBlobStore
from apt_transport_blob.transport import MethodTransport
from core.errors import ConfigurationError
from core.logging.setup import get_logger, parse_level, setup_logging
from core.logging.utilities import log_exception

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="blob",
        description="APT method for Azure Blob Storage",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Log file path (default: BLOB_TRANSPORT_LOG_FILE or /var/log/apt-transport-blob.log)",
    )
    parser.add_argument(
        "--log-level",
        help="File log level (default: BLOB_TRANSPORT_LOG_LEVEL or DEBUG)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=None,
        help="Write JSON log records",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> TransportConfig:
    """
    Load configuration from the environment, then apply CLI overrides.

    Raises:
        ConfigurationError: If a value cannot be parsed
    """
    config = TransportConfig.from_env()
    if args.log_file is not None:
        config.log_file = args.log_file
    if args.log_level is not None:
        try:
            config.log_level = parse_level(args.log_level)
        except ValueError as e:
            raise ConfigurationError(f"--log-level: {e}", cause=e) from e
    if args.json_logs:
        config.json_logs = True
    return config


async def run_method(
    config: TransportConfig,
    input_stream: BinaryIO,
    output_stream: BinaryIO,
) -> None:
    """Run the protocol until end of input; the blob store is closed on exit."""
    async with AzureBlobStore.from_bearer_token(config.storage_bearer_token) as store:
        writer = MessageWriter(output_stream)
        processor = Processor(store, writer)
        transport = MethodTransport(processor, writer, version=__version__)
        await transport.run(input_stream)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    load_dotenv()
    args = parse_args(argv)

    try:
        config = load_config(args)
        setup_logging(
            name="apt_transport_blob",
            log_file=config.log_file,
            json_format=config.json_logs,
            file_level=config.log_level,
            console_level=config.console_level,
            max_bytes=config.max_bytes,
            backup_count=config.backup_count,
        )
    except (ConfigurationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    logger.info(f"Starting blob method {__version__}")

    try:
        asyncio.run(run_method(config, sys.stdin.buffer, sys.stdout.buffer))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130
    except Exception as e:
        log_exception(logger, e, "Method terminated with error")
        return 1

    logger.info("Method finished")
    return 0
