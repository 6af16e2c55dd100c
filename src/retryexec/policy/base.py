r"""Abstract base class for retry policies."""

from __future__ import annotations

__all__ = ["DEFAULT_BASE_DELAY", "DEFAULT_MAX_RETRIES", "BaseRetryPolicy", "RetryPolicy"]

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import timedelta

# Default maximum number of retries
# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 10

# Default delay unit in seconds for the linear policy
# Wait time = attempt * base_delay, i.e. 1s, 2s, ..., 10s
DEFAULT_BASE_DELAY = 1.0

# A policy returns (retry, delay), the delay in seconds (int or float)
# or as a timedelta
RetryPolicy = Callable[[int, Exception], tuple[bool, float | timedelta]]


class BaseRetryPolicy(ABC):
    """Abstract base class for retry policies.

    A retry policy decides, from the attempt number and the last error,
    whether another attempt should be made and how long to wait before
    it. Policies must be pure functions of their inputs so a single
    instance can be shared by concurrent calls.

    Instances are callable, so they can be used anywhere a plain
    ``(attempt, error) -> (retry, delay)`` function is accepted.
    """

    max_delay: float | None = None

    def __call__(self, attempt: int, error: Exception) -> tuple[bool, float]:
        return self.should_retry(attempt, error)

    def should_retry(self, attempt: int, error: Exception) -> tuple[bool, float]:  # noqa: ARG002
        """Decide whether to retry after a failed attempt.

        Args:
            attempt: The retry about to be made (1-indexed). For example,
                attempt=1 is the first retry after the initial failure.
            error: The error raised by the last attempt.

        Returns:
            A tuple ``(retry, delay)`` where ``delay`` is the number of
            seconds to wait before retrying. The delay is ``0.0`` when
            ``retry`` is ``False``.
        """
        if attempt > self.max_retries:
            return (False, 0.0)
        return (True, self._cap(self.calculate(attempt)))

    @property
    @abstractmethod
    def max_retries(self) -> int:
        """The maximum number of retries allowed by the policy."""

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the delay before the given retry.

        Args:
            attempt: The retry about to be made (1-indexed).

        Returns:
            The delay in seconds before the retry.
        """

    def _cap(self, delay: float) -> float:
        if self.max_delay is not None:
            return min(delay, self.max_delay)
        return delay
