"""
pytest configuration for blob transport tests.

Adds src directory to Python path for imports, and the tests directory so
test modules can import the shared fakes.
"""

import io
import sys
from pathlib import Path

import pytest

# Add src and tests directories to Python path
tests_dir = Path(__file__).parent
src_dir = tests_dir.parent / "src"
sys.path.insert(0, str(src_dir))
sys.path.append(str(tests_dir))

from apt_transport_blob.protocol.writer import MessageWriter  # noqa: E402
from core.logging.context import clear_log_context  # noqa: E402
from fakes import FakeFileWriter  # noqa: E402


@pytest.fixture(autouse=True)
def reset_log_context():
    """Keep log context from leaking between tests."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def output():
    """Captured protocol output stream."""
    return io.BytesIO()


@pytest.fixture
def writer(output):
    """Message writer bound to the captured output."""
    return MessageWriter(output)


@pytest.fixture
def file_writer():
    """File writer that records writes in memory."""
    return FakeFileWriter()
