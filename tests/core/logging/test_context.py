"""Tests for log context variables."""

import pytest

from core.logging.context import clear_log_context, get_log_context, log_context


@pytest.fixture(autouse=True)
def cleanup():
    clear_log_context()
    yield
    clear_log_context()


class TestLogContext:
    def test_defaults(self):
        assert get_log_context() == {"message_type": None, "uri": None}

    def test_scoped_values(self):
        with log_context(message_type="600 URI Acquire", uri="blob://a/c/b"):
            assert get_log_context() == {
                "message_type": "600 URI Acquire",
                "uri": "blob://a/c/b",
            }

        assert get_log_context() == {"message_type": None, "uri": None}

    def test_nested_values_restored(self):
        with log_context(message_type="600 URI Acquire"):
            with log_context(uri="blob://a/c/b"):
                assert get_log_context() == {
                    "message_type": "600 URI Acquire",
                    "uri": "blob://a/c/b",
                }
            assert get_log_context() == {"message_type": "600 URI Acquire", "uri": None}

    def test_restored_on_error(self):
        with pytest.raises(RuntimeError):
            with log_context(uri="blob://a/c/b"):
                raise RuntimeError("boom")

        assert get_log_context()["uri"] is None

    def test_clear_inside_block(self):
        with log_context(message_type="601 Configuration"):
            clear_log_context()
            assert get_log_context()["message_type"] is None

    def test_unknown_field(self):
        with pytest.raises(KeyError):
            with log_context(worker="download"):
                pass
