r"""Exponential retry policy."""

from __future__ import annotations

__all__ = ["ExponentialRetryPolicy"]

from retryexec.policy.base import DEFAULT_BASE_DELAY, DEFAULT_MAX_RETRIES, BaseRetryPolicy
from retryexec.utils.validation import validate_retry_params


class ExponentialRetryPolicy(BaseRetryPolicy):
    """Exponential retry policy.

    Waits ``base_delay * 2 ** (attempt - 1)`` seconds before each retry:
    the delay doubles with every retry until ``max_delay`` is reached.

    Args:
        max_retries: Maximum number of retries (default: 10).
        base_delay: The delay before the first retry in seconds
            (default: 1.0).
        max_delay: Optional maximum delay cap in seconds.

    Example:
        ```pycon
        >>> from retryexec.policy import ExponentialRetryPolicy
        >>> policy = ExponentialRetryPolicy(max_retries=5, base_delay=0.5, max_delay=3.0)
        >>> [policy(attempt, OSError())[1] for attempt in range(1, 6)]
        [0.5, 1.0, 2.0, 3.0, 3.0]
        >>> policy(6, OSError())
        (False, 0.0)

        ```
    """

    def __init__(
        self,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay: float = DEFAULT_BASE_DELAY,
        max_delay: float | None = None,
    ) -> None:
        validate_retry_params(max_retries=max_retries, base_delay=base_delay, max_delay=max_delay)
        self._max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(max_retries={self._max_retries}, "
            f"base_delay={self.base_delay}, max_delay={self.max_delay})"
        )

    @property
    def max_retries(self) -> int:
        return self._max_retries

    def calculate(self, attempt: int) -> float:
        return self.base_delay * (2 ** (attempt - 1))
