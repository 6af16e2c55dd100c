r"""Parameter validation utilities for retry policies.

This module provides validation functions for retry parameters to ensure
they meet the required constraints before being used by a retry policy.
"""

from __future__ import annotations

__all__ = ["validate_delay", "validate_retry_params"]


def validate_delay(name: str, value: float | None, *, allow_none: bool = False) -> None:
    """Validate a delay parameter expressed in seconds.

    Args:
        name: The parameter name, used in the error message.
        value: The delay to validate. Must be >= 0.
        allow_none: Whether ``None`` is an accepted value.

    Raises:
        ValueError: If the delay is negative, or ``None`` when not allowed.

    Example:
        ```pycon
        >>> from retryexec.utils.validation import validate_delay
        >>> validate_delay("base_delay", 1.0)
        >>> validate_delay("max_delay", None, allow_none=True)
        >>> validate_delay("base_delay", -1.0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: base_delay must be >= 0, got -1.0

        ```
    """
    if value is None:
        if allow_none:
            return
        msg = f"{name} must not be None"
        raise ValueError(msg)
    if value < 0:
        msg = f"{name} must be >= 0, got {value}"
        raise ValueError(msg)


def validate_retry_params(
    max_retries: int,
    base_delay: float = 0.0,
    max_delay: float | None = None,
) -> None:
    """Validate retry parameters.

    Args:
        max_retries: Maximum number of retry attempts for failed operations.
            Must be >= 0. A value of 0 means no retries (only the initial attempt).
        base_delay: Base delay in seconds used by the backoff formula.
            Must be >= 0.
        max_delay: Optional cap on a single delay in seconds.
            Must be > 0 if provided.

    Raises:
        ValueError: If max_retries or base_delay are negative,
            or if max_delay is non-positive.

    Example:
        ```pycon
        >>> from retryexec.utils.validation import validate_retry_params
        >>> validate_retry_params(max_retries=10)
        >>> validate_retry_params(max_retries=3, base_delay=0.5, max_delay=5.0)
        >>> validate_retry_params(max_retries=-1)  # doctest: +SKIP

        ```
    """
    if max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)
    validate_delay("base_delay", base_delay)
    if max_delay is not None and max_delay <= 0:
        msg = f"max_delay must be > 0, got {max_delay}"
        raise ValueError(msg)
