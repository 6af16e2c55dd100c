r"""Notification sinks reporting the outcome of a retried call.

A sink is called exactly once per top-level call with the number of
failed attempts, the operation, and whether the call succeeded. The
default sink writes a single warning line, and only when at least one
retry happened. The line format is stable:

- ``Needed N tries to complete <operation>`` on success
- ``Failed after N tries <operation>`` on failure or cancellation
"""

from __future__ import annotations

__all__ = [
    "LoggingSink",
    "NotificationSink",
    "default_message",
    "describe_operation",
    "get_default_message",
]

import functools
import logging
from collections.abc import Callable
from typing import Any

from retryexec.utils.structured_logging import log_structured

NotificationSink = Callable[[int, Any, bool], None]


def describe_operation(operation: Any) -> str:
    """Return a human-readable name for an operation.

    Functions and methods are named ``<module>.<qualname>``. Partials
    are named after the function they wrap. Any other object falls back
    to ``str(operation)``.

    Args:
        operation: The operation, usually a callable.

    Returns:
        The operation name.

    Example:
        ```pycon
        >>> import functools
        >>> from retryexec.sink import describe_operation
        >>> describe_operation(functools.partial(int, "42"))
        'builtins.int'
        >>> describe_operation("nightly-export")
        'nightly-export'

        ```
    """
    if isinstance(operation, functools.partial):
        return describe_operation(operation.func)
    module = getattr(operation, "__module__", None)
    qualname = getattr(operation, "__qualname__", None)
    if module and qualname:
        return f"{module}.{qualname}"
    return str(operation)


def get_default_message(attempts: int, operation: Any, succeeded: bool) -> str:
    """Build the summary line for a retried call.

    Args:
        attempts: The number of failed attempts.
        operation: The operation that was executed.
        succeeded: ``True`` if the call eventually succeeded.

    Returns:
        The summary line.

    Example:
        ```pycon
        >>> from retryexec.sink import get_default_message
        >>> get_default_message(1, len, True)
        'Needed 1 tries to complete builtins.len'
        >>> get_default_message(4, "fetch-rates", False)
        'Failed after 4 tries fetch-rates'

        ```
    """
    name = describe_operation(operation)
    if succeeded:
        return f"Needed {attempts} tries to complete {name}"
    return f"Failed after {attempts} tries {name}"


class LoggingSink:
    """Sink writing the summary line to a logger.

    Nothing is logged when the call needed no retry.

    Args:
        logger: The logger to write to. Defaults to the ``retryexec.sink``
            logger.
        level: The log level of the summary line.

    Example:
        ```pycon
        >>> import logging
        >>> from retryexec.sink import LoggingSink
        >>> sink = LoggingSink(logging.getLogger("payments"), level=logging.INFO)
        >>> sink(0, print, True)  # no retry, nothing is logged

        ```
    """

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.WARNING) -> None:
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.level = level

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(logger={self.logger.name!r}, level={self.level})"

    def __call__(self, attempts: int, operation: Any, succeeded: bool) -> None:
        if attempts <= 0:
            return
        log_structured(
            self.logger,
            self.level,
            get_default_message(attempts, operation, succeeded),
            attempts=attempts,
            operation=describe_operation(operation),
            succeeded=succeeded,
        )


def default_message(attempts: int, operation: Any, succeeded: bool) -> None:
    """Default sink: log a warning when the call needed retries.

    When logging is not configured, Python's last-resort handler writes
    the warning to standard error.

    Args:
        attempts: The number of failed attempts.
        operation: The operation that was executed.
        succeeded: ``True`` if the call eventually succeeded.
    """
    _default_sink(attempts, operation, succeeded)


_default_sink = LoggingSink()
