r"""Bridge from synchronous callers to the asynchronous retry loop.

The blocking entry points of the executor do not carry their own
retry loop: they run the coroutine of the asynchronous one to
completion on the calling thread, or on a helper thread when the
calling thread already runs an event loop.
"""

from __future__ import annotations

__all__ = ["run_sync"]

import asyncio
import contextvars
import logging
import threading
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Coroutine

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


def run_sync(coro: Coroutine[object, object, T]) -> T:
    """Run a coroutine to completion and return its result.

    Handles two scenarios:
    1. No running loop in this thread: use ``asyncio.run``
    2. Called from a running event loop: run ``asyncio.run`` on a
       helper thread and block until it finishes

    The context variables of the caller (for example the logging
    correlation ID) are visible inside the coroutine in both cases.

    Args:
        coro: Coroutine to execute.

    Returns:
        The coroutine result.

    Raises:
        BaseException: Whatever the coroutine raises, unchanged.

    Example:
        ```pycon
        >>> import asyncio
        >>> from retryexec.utils.interop import run_sync
        >>> async def add(a, b):
        ...     await asyncio.sleep(0)
        ...     return a + b
        ...
        >>> run_sync(add(1, 2))
        3

        ```
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    logger.debug("Event loop already running, blocking on a helper thread")
    return _run_in_thread(coro)


def _run_in_thread(coro: Coroutine[object, object, T]) -> T:
    result: T | None = None
    error: BaseException | None = None
    context = contextvars.copy_context()

    def runner() -> None:
        nonlocal result, error
        try:
            result = context.run(asyncio.run, coro)
        except BaseException as exc:  # noqa: BLE001
            error = exc

    thread = threading.Thread(target=runner, name="retryexec-run-sync", daemon=True)
    thread.start()
    thread.join()

    if error is not None:
        raise error
    return result  # type: ignore[return-value]
