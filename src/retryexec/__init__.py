r"""retryexec - Retry execution engine for sync and async operations.

This package runs an operation, classifies each failure as transient or
fatal, asks a pluggable retry policy whether and how long to wait, and
repeats until success, fatal error, policy exhaustion or cancellation.
Every top-level call reports exactly one summary to a notification sink.

Key Features:
    - One retry loop shared by blocking and awaitable entry points
    - Plain and coroutine operations, with or without a result
    - Linear (default), exponential and constant retry policies
    - Pluggable transient error classifiers, including one for httpx
    - Cooperative cancellation that interrupts the wait between attempts
    - Original errors re-raised unchanged after the last retry
    - Single summary line per call, with optional JSON structured logging

Example:
    ```pycon
    >>> from retryexec import CancellationToken, RetryExecutor
    >>> from retryexec.policy import LinearRetryPolicy
    >>> executor = RetryExecutor(retry_policy=LinearRetryPolicy(max_retries=4, base_delay=0.125))
    >>> executor.execute_action(lambda: "done")
    'done'
    >>> token = CancellationToken()
    >>> token.cancel_after(30.0)
    >>> executor.execute_action(lambda: 42, token)
    42

    ```
"""

from __future__ import annotations

__all__ = [
    "ApplicationError",
    "CancellationToken",
    "ExecutorConfig",
    "RetryCancelledError",
    "RetryExecutor",
    "__version__",
    "retry",
]

from importlib.metadata import PackageNotFoundError, version

from retryexec.cancellation import CancellationToken
from retryexec.config import ExecutorConfig
from retryexec.decorator import retry
from retryexec.exceptions import ApplicationError, RetryCancelledError
from retryexec.executor import RetryExecutor

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
