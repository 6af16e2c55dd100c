r"""Decorator applying a retry executor to every call of a function."""

from __future__ import annotations

__all__ = ["retry"]

import functools
import inspect
from typing import TYPE_CHECKING, Any

from retryexec.executor import RetryExecutor

if TYPE_CHECKING:
    from collections.abc import Callable

    from retryexec.cancellation import CancellationToken


def retry(
    executor: RetryExecutor | None = None,
    *,
    cancel_token: CancellationToken | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    r"""Retry every call of the decorated function.

    Coroutine functions stay coroutine functions and go through
    ``execute_async``; plain functions go through ``execute_action``.
    The sink names the decorated function.

    Args:
        executor: The executor to use. Defaults to an executor with the
            default configuration.
        cancel_token: Optional cancellation signal shared by every call.

    Returns:
        The decorator.

    Example:
        ```pycon
        >>> from retryexec import RetryExecutor, retry
        >>> from retryexec.policy import ConstantRetryPolicy
        >>> calls = []
        >>> @retry(RetryExecutor(retry_policy=ConstantRetryPolicy(max_retries=2, delay=0.0)))
        ... def flaky(value):
        ...     calls.append(value)
        ...     if len(calls) < 2:
        ...         raise ConnectionError("reset")
        ...     return value * 2
        ...
        >>> flaky(21)
        42
        >>> len(calls)
        2

        ```
    """
    if executor is None:
        executor = RetryExecutor()

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                return await executor.execute_async(
                    functools.partial(func, *args, **kwargs), cancel_token, identity=func
                )

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            return executor.execute_action(
                functools.partial(func, *args, **kwargs), cancel_token, identity=func
            )

        return wrapper

    return decorator
