r"""Unit tests for BaseRetryPolicy."""

from __future__ import annotations

import pytest

from retryexec.policy import BaseRetryPolicy


class SquarePolicy(BaseRetryPolicy):
    """Policy waiting attempt ** 2 seconds, used in tests."""

    def __init__(self, max_retries: int, max_delay: float | None = None) -> None:
        self._max_retries = max_retries
        self.max_delay = max_delay

    @property
    def max_retries(self) -> int:
        return self._max_retries

    def calculate(self, attempt: int) -> float:
        return float(attempt**2)


def test_base_retry_policy_is_abstract() -> None:
    with pytest.raises(TypeError):
        BaseRetryPolicy()  # type: ignore[abstract]


def test_base_retry_policy_call_delegates_to_should_retry() -> None:
    policy = SquarePolicy(max_retries=3)
    assert policy(3, OSError()) == policy.should_retry(3, OSError()) == (True, 9.0)


def test_base_retry_policy_applies_max_delay() -> None:
    assert SquarePolicy(max_retries=5, max_delay=10.0)(4, OSError()) == (True, 10.0)


def test_base_retry_policy_ignores_error() -> None:
    """Test that the default decision depends on the attempt only."""
    policy = SquarePolicy(max_retries=1)
    assert policy(1, OSError()) == policy(1, ValueError()) == (True, 1.0)
