r"""Cooperative cancellation signal shared by sync and async callers.

A ``CancellationToken`` can be cancelled from any thread and wakes
every waiter promptly, whether the waiter blocks a thread
(``wait``) or is suspended in an event loop (``wait_async``). The
synchronous entry points of the executor run their retry loop in a
private event loop, possibly on a helper thread, so the token relies
on ``threading`` primitives and ``call_soon_threadsafe`` rather than
on ``asyncio.Event``.
"""

from __future__ import annotations

__all__ = ["CancellationToken"]

import asyncio
import logging
import threading
from typing import TYPE_CHECKING

from retryexec.exceptions import RetryCancelledError

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class CancellationToken:
    """Thread-safe cancellation signal.

    Example:
        ```pycon
        >>> from retryexec.cancellation import CancellationToken
        >>> token = CancellationToken()
        >>> token.is_cancelled
        False
        >>> token.wait(0.01)
        False
        >>> token.cancel()
        >>> token.is_cancelled
        True
        >>> token.wait(10.0)  # returns immediately
        True

        ```
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: list[Callable[[], None]] = []
        self._timer: threading.Timer | None = None

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(cancelled={self.is_cancelled})"

    @property
    def is_cancelled(self) -> bool:
        """Indicate whether cancellation has been requested."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation and wake every registered waiter.

        Calling ``cancel`` more than once has no further effect. A callback
        raising an exception is logged and does not prevent the remaining
        callbacks from running.
        """
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
        logger.debug("Cancellation requested")
        for callback in callbacks:
            try:
                callback()
            except Exception:
                logger.exception(f"Cancellation callback {callback!r} failed")

    def cancel_after(self, delay: float) -> None:
        """Schedule a cancellation after ``delay`` seconds.

        Args:
            delay: The delay in seconds before the token is cancelled.
                Must be >= 0.

        Raises:
            ValueError: If ``delay`` is negative.
        """
        if delay < 0:
            msg = f"delay must be >= 0, got {delay}"
            raise ValueError(msg)
        timer = threading.Timer(delay, self.cancel)
        timer.daemon = True
        with self._lock:
            if self._event.is_set():
                return
            if self._timer is not None:
                self._timer.cancel()
            self._timer = timer
        timer.start()

    def raise_if_cancelled(self) -> None:
        """Raise ``RetryCancelledError`` if cancellation has been
        requested.

        Raises:
            RetryCancelledError: If the token is cancelled.
        """
        if self.is_cancelled:
            raise RetryCancelledError("Cancellation requested")

    def register(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback invoked once when the token is cancelled.

        The callback runs in the thread that calls ``cancel``, or
        immediately in the calling thread if the token is already
        cancelled.

        Args:
            callback: The zero-argument callable to invoke.

        Returns:
            A function that unregisters the callback. Calling it after
            the callback already ran is harmless.
        """
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return lambda: self._unregister(callback)
        callback()
        return lambda: None

    def _unregister(self, callback: Callable[[], None]) -> None:
        with self._lock:
            try:
                self._callbacks.remove(callback)
            except ValueError:
                pass

    def wait(self, timeout: float | None = None) -> bool:
        """Block the calling thread until cancellation or timeout.

        Args:
            timeout: Maximum number of seconds to wait, or ``None`` to
                wait until cancellation.

        Returns:
            ``True`` if the token is cancelled, otherwise ``False``.
        """
        return self._event.wait(timeout)

    async def wait_async(self, timeout: float | None = None) -> bool:
        """Suspend the current coroutine until cancellation or timeout.

        The wait is woken from any thread calling ``cancel``.

        Args:
            timeout: Maximum number of seconds to wait, or ``None`` to
                wait until cancellation.

        Returns:
            ``True`` if the token is cancelled, otherwise ``False``.
        """
        if self.is_cancelled:
            return True
        loop = asyncio.get_running_loop()
        waiter: asyncio.Future[None] = loop.create_future()

        def _wake() -> None:
            try:
                loop.call_soon_threadsafe(_set_done, waiter)
            except RuntimeError:
                # The waiting loop closed between registration and cancellation.
                logger.debug("Event loop closed before cancellation was delivered")

        unregister = self.register(_wake)
        try:
            await asyncio.wait({waiter}, timeout=timeout)
        finally:
            unregister()
            if not waiter.done():
                waiter.cancel()
        return self.is_cancelled


def _set_done(waiter: asyncio.Future[None]) -> None:
    if not waiter.done():
        waiter.set_result(None)
