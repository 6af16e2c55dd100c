r"""Retry executor: the public entry points of the retry engine.

This module provides the RetryExecutor class. It accepts the four call
shapes of an operation (plain or coroutine function, with or without a
result), normalizes them into one awaitable call, and hands it to the
shared retry loop.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import inspect
from typing import TYPE_CHECKING, Any

from retryexec.cancellation import CancellationToken
from retryexec.config import ExecutorConfig
from retryexec.core import run_with_retry
from retryexec.utils.interop import run_sync

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from retryexec.classifier import ErrorClassifier
    from retryexec.policy import RetryPolicy
    from retryexec.sink import NotificationSink


class RetryExecutor:
    r"""Execute operations with automatic retry.

    The executor holds no per-call state: one instance can serve many
    concurrent calls, from threads or from tasks. Each call owns its
    attempt counter and notifies the sink exactly once.

    Args:
        config: Optional ExecutorConfig instance. If ``None``, the
            defaults are used: linear policy (10 retries, 1s unit),
            every error transient except ``ApplicationError``, warning
            line when retries happened.
        retry_policy: Optional policy overriding ``config.retry_policy``.
        classifier: Optional classifier overriding ``config.classifier``.
        sink: Optional sink overriding ``config.sink``.

    Example:
        ```pycon
        >>> from retryexec import RetryExecutor
        >>> from retryexec.policy import ConstantRetryPolicy
        >>> executor = RetryExecutor(retry_policy=ConstantRetryPolicy(max_retries=3, delay=0.0))
        >>> outcomes = iter([ConnectionError("reset"), 42])
        >>> def fetch():
        ...     outcome = next(outcomes)
        ...     if isinstance(outcome, Exception):
        ...         raise outcome
        ...     return outcome
        ...
        >>> executor.execute_action(fetch, sink=lambda *args: None)
        42

        ```
    """

    def __init__(
        self,
        config: ExecutorConfig | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
        classifier: ErrorClassifier | None = None,
        sink: NotificationSink | None = None,
    ) -> None:
        self._config: ExecutorConfig = (config or ExecutorConfig()).merge(
            retry_policy=retry_policy, classifier=classifier, sink=sink
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(retry_policy={self._config.retry_policy!r}, "
            f"classifier={self._config.classifier!r})"
        )

    @property
    def config(self) -> ExecutorConfig:
        """The configuration used by every call of this executor."""
        return self._config

    async def execute_async(
        self,
        operation: Callable[[], Any],
        cancel_token: CancellationToken | None = None,
        sink: NotificationSink | None = None,
        *,
        identity: Any = None,
    ) -> Any:
        """Execute an operation with retry and await its result.

        ``operation`` is called without argument. It may be a plain
        function or a coroutine function, and may return a value or
        ``None``. A plain function runs on the event loop thread.

        Args:
            operation: The operation to execute.
            cancel_token: Optional cancellation signal. Defaults to a
                token that is never cancelled.
            sink: Optional sink for this call only. Defaults to the
                executor sink.
            identity: Optional object named by the sink. Defaults to
                ``operation``.

        Returns:
            The result of the first successful attempt.

        Raises:
            RetryCancelledError: If the call is cancelled between attempts.
            Exception: The original error of the operation when it is
                fatal or when the retry policy is exhausted.
        """
        return await run_with_retry(
            _as_awaitable(operation),
            classifier=self._config.classifier,
            retry_policy=self._config.retry_policy,
            cancel_token=cancel_token if cancel_token is not None else CancellationToken(),
            sink=sink if sink is not None else self._config.sink,
            identity=operation if identity is None else identity,
        )

    def execute_action(
        self,
        operation: Callable[[], Any],
        cancel_token: CancellationToken | None = None,
        sink: NotificationSink | None = None,
        *,
        identity: Any = None,
    ) -> Any:
        """Execute an operation with retry and block for its result.

        This runs ``execute_async`` to completion on the calling thread,
        or on a helper thread when the calling thread already runs an
        event loop. Arguments and errors are those of ``execute_async``.

        Args:
            operation: The operation to execute.
            cancel_token: Optional cancellation signal.
            sink: Optional sink for this call only.
            identity: Optional object named by the sink.

        Returns:
            The result of the first successful attempt.
        """
        return run_sync(self.execute_async(operation, cancel_token, sink, identity=identity))


def _as_awaitable(operation: Callable[[], Any]) -> Callable[[], Awaitable[Any]]:
    async def call() -> Any:
        result = operation()
        if inspect.isawaitable(result):
            return await result
        return result

    return call
