"""Logging mixins."""

from typing import Any, Dict, Optional

from core.logging.setup import get_logger
from core.logging.utilities import log_with_context

# Instance attributes copied into every record logged through LoggedClass
CONTEXT_ATTRIBUTES = ["account", "container", "blob_name"]


def _extract_instance_context(obj: Any) -> Dict[str, Any]:
    """Extract loggable identifier fields from instance attributes."""
    ctx: Dict[str, Any] = {}
    for attr in CONTEXT_ATTRIBUTES:
        value = getattr(obj, attr, None)
        if value:
            ctx[attr] = value
    return ctx


class LoggedClass:
    """
    Mixin providing logging infrastructure for storage/client classes.

    Provides:
    - self._logger: Logger instance
    - self._log(): Log with auto-extracted context

    Auto-extracts context from instance attributes named in
    CONTEXT_ATTRIBUTES (account, container, blob_name).

    Example:
        class AzureBlob(LoggedClass):
            def __init__(self, location, client):
                self.account = location.account
                super().__init__()

            async def exists(self):
                self._log(logging.DEBUG, "Checking blob existence")
                ...
    """

    log_component: Optional[str] = None  # Optional logger name suffix

    def __init__(self, *args, **kwargs):
        logger_name = self.__class__.__module__
        if self.log_component:
            logger_name = f"{logger_name}.{self.log_component}"
        self._logger = get_logger(logger_name)
        super().__init__(*args, **kwargs)

    def _log(self, level: int, msg: str, **extra: Any) -> None:
        """
        Log with automatic context extraction from instance.

        Args:
            level: Log level
            msg: Log message
            **extra: Additional context fields
        """
        context = _extract_instance_context(self)
        context.update(extra)
        log_with_context(self._logger, level, msg, **context)

