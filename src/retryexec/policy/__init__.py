r"""Retry policies deciding whether and when to retry.

This package provides the policies consulted by the retry loop after
each transient failure. Each policy returns a ``(retry, delay)`` pair
from the retry number and the last error.
"""

from __future__ import annotations

__all__ = [
    "BaseRetryPolicy",
    "ConstantRetryPolicy",
    "ExponentialRetryPolicy",
    "LinearRetryPolicy",
    "RetryPolicy",
    "default_retry_policy",
]

from retryexec.policy.base import BaseRetryPolicy, RetryPolicy
from retryexec.policy.constant import ConstantRetryPolicy
from retryexec.policy.exponential import ExponentialRetryPolicy
from retryexec.policy.linear import LinearRetryPolicy


def default_retry_policy() -> LinearRetryPolicy:
    r"""Return the default retry policy.

    Returns:
        A linear policy with 10 retries and a 1 second delay unit.

    Example:
        ```pycon
        >>> from retryexec.policy import default_retry_policy
        >>> default_retry_policy()
        LinearRetryPolicy(max_retries=10, base_delay=1.0, max_delay=None)

        ```
    """
    return LinearRetryPolicy()
