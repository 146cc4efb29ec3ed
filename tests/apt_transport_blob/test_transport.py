"""
Tests for the MethodTransport framing loop.

Test coverage:
- Capabilities sent before any input is read
- One message per blank-line-terminated block
- Malformed and unknown messages are dropped without ending the run
- A fatal processor error sends General Failure and re-raises
- End of input ends the run, partial buffer or not
"""

import io

import pytest

from apt_transport_blob import __version__
from apt_transport_blob.processor import Processor
from apt_transport_blob.protocol.message import Message, MessageType
from apt_transport_blob.transport import MethodTransport
from core.errors import HeaderNotFoundError
from fakes import FakeBlob, FakeBlobStore, read_messages

URI = "https://account.blob.core.windows.net/container/path/to/object"

ACQUIRE = (
    b"600 URI Acquire\n"
    b"URI: " + URI.encode() + b"\n"
    b"Filename: /tmp/object\n"
    b"\n"
)


@pytest.fixture
def blob():
    return FakeBlob(contents=b"package contents")


@pytest.fixture
def transport(blob, writer, file_writer):
    store = FakeBlobStore({"/container/path/to/object": blob})
    processor = Processor(store, writer, file_writer)
    return MethodTransport(processor, writer, version=__version__)


def types(output):
    return [m.message_type for m in read_messages(output)]


@pytest.mark.asyncio
class TestMethodTransport:
    """Test the read/parse/process loop."""

    async def test_capabilities_on_empty_input(self, transport, output):
        await transport.run(io.BytesIO(b""))

        messages = read_messages(output)
        assert messages == [Message.capabilities(__version__)]
        assert output.getvalue().startswith(b"100 Capabilities\n")

    async def test_success_exchange(self, transport, output, file_writer):
        await transport.run(io.BytesIO(ACQUIRE))

        assert types(output) == [
            MessageType.CAPABILITIES,
            MessageType.STATUS,
            MessageType.URI_START,
            MessageType.URI_DONE,
        ]
        assert file_writer.files["/tmp/object"] == b"package contents"

    async def test_configuration_then_acquire(self, transport, output):
        stream = io.BytesIO(
            b"601 Configuration\n"
            b"Config-Item: Debug::Acquire::blob=1\n"
            b"\n" + ACQUIRE
        )

        await transport.run(stream)

        assert types(output) == [
            MessageType.CAPABILITIES,
            MessageType.STATUS,
            MessageType.URI_START,
            MessageType.URI_DONE,
        ]

    async def test_sequential_acquisitions(self, transport, output):
        await transport.run(io.BytesIO(ACQUIRE + ACQUIRE))

        assert types(output) == [
            MessageType.CAPABILITIES,
            MessageType.STATUS,
            MessageType.URI_START,
            MessageType.URI_DONE,
            MessageType.STATUS,
            MessageType.URI_START,
            MessageType.URI_DONE,
        ]

    async def test_malformed_message_is_dropped(self, transport, output):
        stream = io.BytesIO(b"600 URI Acquire\nNo header line\n\n" + ACQUIRE)

        await transport.run(stream)

        assert types(output) == [
            MessageType.CAPABILITIES,
            MessageType.STATUS,
            MessageType.URI_START,
            MessageType.URI_DONE,
        ]

    async def test_unknown_code_is_dropped(self, transport, output):
        stream = io.BytesIO(b"999 Something New\nKey: Value\n\n" + ACQUIRE)

        await transport.run(stream)

        assert types(output)[-1] is MessageType.URI_DONE

    async def test_stray_blank_line_is_dropped(self, transport, output):
        await transport.run(io.BytesIO(b"\n" + ACQUIRE))
        assert types(output)[-1] is MessageType.URI_DONE

    async def test_agent_message_type_is_ignored(self, transport, output):
        stream = io.BytesIO(b"201 URI Done\nURI: " + URI.encode() + b"\n\n")

        await transport.run(stream)

        assert types(output) == [MessageType.CAPABILITIES]

    async def test_missing_filename_continues(self, transport, output):
        stream = io.BytesIO(
            b"600 URI Acquire\nURI: " + URI.encode() + b"\n\n" + ACQUIRE
        )

        await transport.run(stream)

        messages = read_messages(output)
        assert [m.message_type for m in messages] == [
            MessageType.CAPABILITIES,
            MessageType.STATUS,
            MessageType.URI_FAILURE,
            MessageType.STATUS,
            MessageType.URI_START,
            MessageType.URI_DONE,
        ]
        assert messages[2].uri() == URI

    async def test_blob_absent(self, writer, output, file_writer):
        processor = Processor(FakeBlobStore(), writer, file_writer)
        transport = MethodTransport(processor, writer, version=__version__)

        await transport.run(io.BytesIO(ACQUIRE))

        messages = read_messages(output)
        assert [m.message_type for m in messages] == [
            MessageType.CAPABILITIES,
            MessageType.STATUS,
            MessageType.URI_FAILURE,
        ]
        assert messages[-1].header("Message") == "Blob does not exist"

    async def test_missing_uri_is_fatal(self, transport, output):
        stream = io.BytesIO(
            b"600 URI Acquire\nFilename: /tmp/object\n\n" + ACQUIRE
        )

        with pytest.raises(HeaderNotFoundError):
            await transport.run(stream)

        messages = read_messages(output)
        assert [m.message_type for m in messages] == [
            MessageType.CAPABILITIES,
            MessageType.STATUS,
            MessageType.GENERAL_FAILURE,
        ]
        assert messages[-1].header("Message") == "Error: Header not found: URI"

    async def test_partial_message_at_eof(self, transport, output):
        stream = io.BytesIO(b"600 URI Acquire\nURI: " + URI.encode() + b"\n")

        await transport.run(stream)

        assert types(output) == [MessageType.CAPABILITIES]
