"""Log context variables propagated into formatted records."""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Dict, Iterator, Optional

_message_type: ContextVar[Optional[str]] = ContextVar("message_type", default=None)
_uri: ContextVar[Optional[str]] = ContextVar("uri", default=None)

_VARS = {
    "message_type": _message_type,
    "uri": _uri,
}


def get_log_context() -> Dict[str, Optional[str]]:
    """Return current context values."""
    return {name: var.get() for name, var in _VARS.items()}


def clear_log_context() -> None:
    """Reset all context values."""
    for var in _VARS.values():
        var.set(None)


@contextmanager
def log_context(**values: Optional[str]) -> Iterator[None]:
    """
    Scope context values to a block, restoring the previous values on exit.

    Example:
        with log_context(message_type="600 URI Acquire", uri=uri):
            await processor.uri_acquire(message)
    """
    tokens = []
    for name, value in values.items():
        if name not in _VARS:
            raise KeyError(f"Unknown log context field: {name}")
        tokens.append((_VARS[name], _VARS[name].set(value)))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)
