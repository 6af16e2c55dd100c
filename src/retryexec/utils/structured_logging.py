r"""Structured logging utilities for machine-readable log output.

The retry engine logs through Python's standard logging module. This
module adds an opt-in JSON formatter, correlation IDs that follow a
call across threads and tasks, and a helper to attach structured
fields to a log record. The library never installs handlers itself.

Example:
    Enable structured logging for retryexec:

    ```python
    import logging
    from retryexec.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("retryexec")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```

    Tag the summary line of one call with a correlation ID:

    ```python
    from retryexec import RetryExecutor
    from retryexec.utils.structured_logging import clear_correlation_id, set_correlation_id

    set_correlation_id("order-123")
    try:
        RetryExecutor().execute_action(submit_order)
    finally:
        clear_correlation_id()
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from typing import Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "retryexec_correlation_id", default=None
)

# Attributes every LogRecord carries; anything else came from ``extra``.
_RECORD_ATTRIBUTES = frozenset(
    {
        "args",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


def get_correlation_id() -> str | None:
    """Get the correlation ID of the current context.

    Returns:
        The current correlation ID, or None if not set.

    Example:
        ```pycon
        >>> from retryexec.utils.structured_logging import (
        ...     clear_correlation_id,
        ...     get_correlation_id,
        ...     set_correlation_id,
        ... )
        >>> set_correlation_id("req-123")
        >>> get_correlation_id()
        'req-123'
        >>> clear_correlation_id()
        >>> get_correlation_id() is None
        True

        ```
    """
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current context.

    The ID is stored in a context variable, so it is visible to the
    coroutine or thread that set it and to the tasks it spawns.

    Args:
        correlation_id: The correlation ID to set (e.g., request ID, trace ID).
    """
    _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    """Clear the correlation ID for the current context."""
    _correlation_id.set(None)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Each record becomes one JSON object with the fields ``timestamp``,
    ``level``, ``logger``, ``message``, ``module``, ``function`` and
    ``line``, plus ``correlation_id`` when one is set, ``exception``
    when the record carries exception info, and every field passed
    through ``extra``. Values that are not JSON serializable are
    rendered with ``str``.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from retryexec.utils.structured_logging import StructuredFormatter
        >>> record = logging.LogRecord(
        ...     "retryexec", logging.WARNING, __file__, 1, "Needed 2 tries", None, None
        ... )
        >>> record.attempts = 2
        >>> payload = json.loads(StructuredFormatter().format(record))
        >>> payload["message"], payload["attempts"]
        ('Needed 2 tries', 2)

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        correlation_id = get_correlation_id()
        if correlation_id is not None:
            log_data["correlation_id"] = correlation_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value

        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002, N802
        """Format the record timestamp as ISO 8601 in UTC.

        Args:
            record: The log record.
            datefmt: Ignored, the output is always ISO 8601.

        Returns:
            ISO 8601 formatted timestamp with millisecond precision.
        """
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log a message with structured fields.

    The fields are attached to the record and appear in the JSON output
    when ``StructuredFormatter`` is used. Plain formatters ignore them.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.WARNING).
        message: Log message.
        **extra: Additional structured fields to include in the log.
    """
    logger.log(level, message, extra=extra)
