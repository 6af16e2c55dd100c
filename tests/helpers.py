r"""Operations used across the test suite."""

from __future__ import annotations

__all__ = ["FailingOperation", "FlakyOperation"]

import asyncio


class FailingOperation:
    """Operation that always raises the given error.

    Args:
        error_type: The type of the error to raise.

    Attributes:
        calls: The number of calls so far.
    """

    def __init__(self, error_type: type[Exception] = TimeoutError) -> None:
        self.error_type = error_type
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1
        msg = f"attempt {self.calls} failed"
        raise self.error_type(msg)


class FlakyOperation:
    """Operation failing a fixed number of times before returning.

    Args:
        failures: The number of calls raising ``ConnectionError``.
        result: The value returned once the failures are used up.
        is_async: Whether calling returns a coroutine.

    Attributes:
        calls: The number of calls so far.
    """

    def __init__(self, failures: int, result: object = None, *, is_async: bool = False) -> None:
        self.failures = failures
        self.result = result
        self.is_async = is_async
        self.calls = 0

    def __call__(self) -> object:
        if self.is_async:
            return self._run_async()
        return self._run()

    def _run(self) -> object:
        self.calls += 1
        if self.calls <= self.failures:
            msg = f"attempt {self.calls} failed"
            raise ConnectionError(msg)
        return self.result

    async def _run_async(self) -> object:
        await asyncio.sleep(0)
        return self._run()
