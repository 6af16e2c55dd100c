r"""End-to-end tests running the four call shapes in parallel with real
delays."""

from __future__ import annotations

import asyncio
import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import TYPE_CHECKING, Any

import pytest

from retryexec import ApplicationError, CancellationToken, RetryCancelledError, RetryExecutor
from retryexec.policy import LinearRetryPolicy
from retryexec.sink import get_default_message

if TYPE_CHECKING:
    from collections.abc import Callable
    from concurrent.futures import Future


def _create_executor(messages: list[str], base_delay: float = 0.125) -> RetryExecutor:
    def sink(attempts: int, operation: Any, succeeded: bool) -> None:
        if attempts > 0:
            messages.append(get_default_message(attempts, operation, succeeded))

    return RetryExecutor(
        retry_policy=LinearRetryPolicy(max_retries=4, base_delay=base_delay), sink=sink
    )


def _run_all_shapes(
    executor: RetryExecutor,
    error_factory: Callable[[int], Exception | None],
    token: CancellationToken,
) -> list[Future]:
    """Start the four call shapes on worker threads.

    ``error_factory`` receives the 1-indexed call number of a shape and
    returns the error to raise, or ``None`` to succeed.
    """

    def make_counter() -> Callable[[], Exception | None]:
        calls = 0

        def next_error() -> Exception | None:
            nonlocal calls
            calls += 1
            return error_factory(calls)

        return next_error

    sync_void_error = make_counter()
    sync_result_error = make_counter()
    async_void_error = make_counter()
    async_result_error = make_counter()

    def sync_void() -> None:
        error = sync_void_error()
        if error is not None:
            raise error

    def sync_result() -> int:
        error = sync_result_error()
        if error is not None:
            raise error
        return 1

    async def async_void() -> None:
        error = async_void_error()
        if error is not None:
            raise error
        await asyncio.sleep(0.001)

    async def async_result() -> int:
        error = async_result_error()
        if error is not None:
            raise error
        await asyncio.sleep(0.001)
        return 1

    pool = ThreadPoolExecutor(max_workers=4)
    futures = [
        pool.submit(lambda: asyncio.run(executor.execute_async(async_void, token))),
        pool.submit(executor.execute_action, sync_void, token),
        pool.submit(executor.execute_action, sync_result, token),
        pool.submit(executor.execute_action, async_result, token),
    ]
    pool.shutdown(wait=False)
    return futures


def _assert_all_raised(futures: list[Future], error_type: type[BaseException]) -> None:
    for future in futures:
        assert isinstance(future.exception(timeout=0), error_type), future.exception(timeout=0)


def test_policy_exhausted_after_four_retries() -> None:
    """Test that an always transient error fails after 5 attempts."""
    messages: list[str] = []
    futures = _run_all_shapes(
        _create_executor(messages), lambda call: TimeoutError(), CancellationToken()
    )

    done, _ = wait(futures, timeout=1.0)
    assert len(done) < len(futures), "calls ended before the retry delays elapsed"
    done, not_done = wait(futures, timeout=5.0)
    assert not not_done

    _assert_all_raised(futures, TimeoutError)
    assert len(messages) == 4
    for message in messages:
        assert message.startswith("Failed after 4 ") and "test_end_to_end" in message, message


def test_application_error_fails_at_once() -> None:
    """Test that application errors fail without retry nor message."""
    messages: list[str] = []
    futures = _run_all_shapes(
        _create_executor(messages), lambda call: ApplicationError(), CancellationToken()
    )

    _, not_done = wait(futures, timeout=1.0)
    assert not not_done
    _assert_all_raised(futures, ApplicationError)
    assert messages == []


def test_success_after_one_failure() -> None:
    messages: list[str] = []
    futures = _run_all_shapes(
        _create_executor(messages),
        lambda call: Exception("first call fails") if call == 1 else None,
        CancellationToken(),
    )

    _, not_done = wait(futures, timeout=2.0)
    assert not not_done
    for future in futures:
        assert future.exception(timeout=0) is None
    assert len(messages) == 4
    for message in messages:
        assert message.startswith("Needed 1 ") and "test_end_to_end" in message, message


def test_success_first_try() -> None:
    messages: list[str] = []
    futures = _run_all_shapes(_create_executor(messages), lambda call: None, CancellationToken())

    _, not_done = wait(futures, timeout=1.0)
    assert not not_done
    assert [future.result(timeout=0) for future in futures] == [None, None, 1, 1]
    assert messages == []


def test_cancel_during_wait() -> None:
    """Test that cancellation wakes the waiting calls promptly.

    With a 0.25s unit, the calls wait from 0.25s to 0.75s after the
    second failure, so a cancellation at 0.5s interrupts that wait.
    """
    messages: list[str] = []
    token = CancellationToken()
    futures = _run_all_shapes(
        _create_executor(messages, base_delay=0.25), lambda call: Exception(), token
    )

    time.sleep(0.5)
    cancelled_at = time.monotonic()
    token.cancel()
    _, not_done = wait(futures, timeout=1.0)
    assert not not_done
    assert time.monotonic() - cancelled_at < 0.2

    _assert_all_raised(futures, RetryCancelledError)
    assert len(messages) == 4
    for message in messages:
        assert message.startswith("Failed after 2 ") and "test_end_to_end" in message, message


@pytest.mark.asyncio
async def test_concurrent_async_calls_share_executor() -> None:
    """Test that concurrent calls keep independent attempt counters."""
    messages: list[str] = []
    executor = _create_executor(messages, base_delay=0.01)
    counters = {"a": 0, "b": 0}

    def make(name: str, failures: int) -> Callable[[], Any]:
        async def operation() -> str:
            counters[name] += 1
            await asyncio.sleep(0.001)
            if counters[name] <= failures:
                raise ConnectionError(name)
            return name

        return operation

    results = await asyncio.gather(
        executor.execute_async(make("a", 1), identity="a"),
        executor.execute_async(make("b", 3), identity="b"),
    )

    assert results == ["a", "b"]
    assert sorted(messages) == ["Needed 1 tries to complete a", "Needed 3 tries to complete b"]
