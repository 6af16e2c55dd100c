r"""Constant retry policy."""

from __future__ import annotations

__all__ = ["ConstantRetryPolicy"]

from retryexec.policy.base import DEFAULT_BASE_DELAY, DEFAULT_MAX_RETRIES, BaseRetryPolicy
from retryexec.utils.validation import validate_delay, validate_retry_params


class ConstantRetryPolicy(BaseRetryPolicy):
    """Constant retry policy.

    Waits the same delay before every retry. A zero delay retries
    immediately; each immediate retry still counts as an attempt.

    Args:
        max_retries: Maximum number of retries (default: 10).
        delay: The fixed delay in seconds (default: 1.0).

    Example:
        ```pycon
        >>> from retryexec.policy import ConstantRetryPolicy
        >>> policy = ConstantRetryPolicy(max_retries=2, delay=0.0)
        >>> policy(1, OSError()), policy(2, OSError()), policy(3, OSError())
        ((True, 0.0), (True, 0.0), (False, 0.0))

        ```
    """

    def __init__(
        self, max_retries: int = DEFAULT_MAX_RETRIES, delay: float = DEFAULT_BASE_DELAY
    ) -> None:
        validate_retry_params(max_retries=max_retries)
        validate_delay("delay", delay)
        self._max_retries = max_retries
        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(max_retries={self._max_retries}, delay={self.delay})"

    @property
    def max_retries(self) -> int:
        return self._max_retries

    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        return self.delay
