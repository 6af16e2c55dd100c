r"""Retry loop shared by every entry point of the executor.

The loop is written once, against an awaitable operation. The blocking
entry points run this same coroutine to completion, so the retry,
backoff, cancellation and notification logic exists in one place only.
"""

from __future__ import annotations

__all__ = ["run_with_retry"]

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Any, TypeVar

from retryexec.exceptions import RetryCancelledError
from retryexec.sink import describe_operation

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from retryexec.cancellation import CancellationToken
    from retryexec.classifier import ErrorClassifier
    from retryexec.policy import RetryPolicy
    from retryexec.sink import NotificationSink

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


async def run_with_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    classifier: ErrorClassifier,
    retry_policy: RetryPolicy,
    cancel_token: CancellationToken,
    sink: NotificationSink,
    identity: Any = None,
) -> T:
    """Execute an operation until it succeeds or retrying stops.

    Each failure is first classified. A fatal error is re-raised at
    once, without consulting the policy. A transient error is passed to
    the policy with the number of the retry about to be made; when the
    policy declines, the error is re-raised unchanged. Otherwise the
    loop waits for the returned delay and tries again.

    Cancellation is checked right after each failure accepted for retry
    and right after each delay. The delay itself is interrupted as soon
    as the token is cancelled.

    The sink is called exactly once, whatever the outcome, with the
    number of failed attempts that were retried. A call succeeding at
    the first attempt reports 0. An exception raised by the sink is
    logged and never replaces the result or the error of the call.

    Args:
        operation: Zero-argument callable returning an awaitable.
        classifier: Callable returning ``True`` for transient errors.
        retry_policy: Callable ``(attempt, error) -> (retry, delay)``,
            where ``attempt`` is 1 for the first retry and ``delay`` is a
            number of seconds or a ``datetime.timedelta``.
        cancel_token: The cancellation signal.
        sink: Callable ``(attempts, operation, succeeded)``.
        identity: The object named in the sink call. Defaults to
            ``operation``.

    Returns:
        The result of the first successful attempt.

    Raises:
        RetryCancelledError: If cancellation is observed at a checkpoint.
            The last operation error is chained as the cause.
        Exception: The original error of the operation when it is fatal
            or when the policy declines to retry it.
    """
    if identity is None:
        identity = operation
    attempt = 0
    succeeded = False
    try:
        while True:
            try:
                result = await operation()
            except Exception as exc:
                if not classifier(exc):
                    logger.debug(
                        f"{describe_operation(identity)} failed with non-transient "
                        f"{type(exc).__name__} after {attempt} retries"
                    )
                    raise
                should_retry, delay = retry_policy(attempt + 1, exc)
                if not should_retry:
                    logger.debug(
                        f"{describe_operation(identity)} failed with {type(exc).__name__}, "
                        f"retry policy exhausted after {attempt} retries"
                    )
                    raise
                if isinstance(delay, timedelta):
                    delay = delay.total_seconds()
                attempt += 1
                last_error = exc
                if cancel_token.is_cancelled:
                    raise RetryCancelledError(attempts=attempt, last_error=exc) from exc
                logger.debug(
                    f"{describe_operation(identity)} failed with {type(exc).__name__} "
                    f"(retry {attempt}), waiting {delay:.2f}s"
                )
            else:
                succeeded = True
                return result

            if await cancel_token.wait_async(delay):
                logger.debug(f"{describe_operation(identity)} cancelled after {attempt} retries")
                raise RetryCancelledError(attempts=attempt, last_error=last_error) from last_error
    finally:
        try:
            sink(attempt, identity, succeeded)
        except Exception:
            logger.exception(f"Notification sink failed for {describe_operation(identity)}")
