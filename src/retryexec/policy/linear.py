r"""Linear retry policy."""

from __future__ import annotations

__all__ = ["LinearRetryPolicy"]

from retryexec.policy.base import DEFAULT_BASE_DELAY, DEFAULT_MAX_RETRIES, BaseRetryPolicy
from retryexec.utils.validation import validate_retry_params


class LinearRetryPolicy(BaseRetryPolicy):
    """Linear retry policy.

    Allows ``max_retries`` retries and waits ``attempt * base_delay``
    seconds before each of them, with an optional ``max_delay`` cap.
    With the defaults, the waits are 1s, 2s, ..., 10s, about 55s in
    total before giving up.

    Args:
        max_retries: Maximum number of retries (default: 10).
        base_delay: The delay unit in seconds (default: 1.0).
        max_delay: Optional maximum delay cap in seconds.

    Example:
        ```pycon
        >>> from retryexec.policy import LinearRetryPolicy
        >>> policy = LinearRetryPolicy(max_retries=4, base_delay=0.125)
        >>> policy(1, TimeoutError())
        (True, 0.125)
        >>> policy(4, TimeoutError())
        (True, 0.5)
        >>> policy(5, TimeoutError())
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
        return attempt * self.base_delay
