r"""Unit tests for LinearRetryPolicy."""

from __future__ import annotations

import pytest

from retryexec.policy import LinearRetryPolicy, default_retry_policy


def test_linear_retry_policy_default_values() -> None:
    """Test linear policy with default values."""
    policy = LinearRetryPolicy()
    assert policy.max_retries == 10
    assert policy.base_delay == 1.0
    assert policy.max_delay is None


@pytest.mark.parametrize("attempt", range(1, 11))
def test_linear_retry_policy_default_delays(attempt: int) -> None:
    """Test that the default policy waits attempt seconds."""
    assert LinearRetryPolicy()(attempt, TimeoutError()) == (True, float(attempt))


def test_linear_retry_policy_default_total_wait() -> None:
    """Test that the default policy waits 55 seconds in total."""
    policy = default_retry_policy()
    assert sum(policy(attempt, TimeoutError())[1] for attempt in range(1, 11)) == 55.0


def test_linear_retry_policy_exhausted() -> None:
    """Test that retries stop after max_retries."""
    policy = LinearRetryPolicy(max_retries=4, base_delay=0.125)
    assert policy(4, TimeoutError()) == (True, 0.5)
    assert policy(5, TimeoutError()) == (False, 0.0)
    assert policy.should_retry(6, TimeoutError()) == (False, 0.0)


def test_linear_retry_policy_with_max_delay() -> None:
    """Test linear policy with max_delay cap."""
    policy = LinearRetryPolicy(max_retries=10, base_delay=2.0, max_delay=5.0)
    assert policy(1, OSError()) == (True, 2.0)
    assert policy(2, OSError()) == (True, 4.0)
    assert policy(3, OSError()) == (True, 5.0)


def test_linear_retry_policy_zero_max_retries() -> None:
    """Test that zero retries never retries."""
    assert LinearRetryPolicy(max_retries=0)(1, OSError()) == (False, 0.0)


def test_linear_retry_policy_zero_base_delay() -> None:
    assert LinearRetryPolicy(base_delay=0.0)(5, OSError()) == (True, 0.0)


def test_linear_retry_policy_repr() -> None:
    assert (
        repr(LinearRetryPolicy(max_retries=4, base_delay=0.125))
        == "LinearRetryPolicy(max_retries=4, base_delay=0.125, max_delay=None)"
    )


def test_linear_retry_policy_invalid_max_retries() -> None:
    with pytest.raises(ValueError, match=r"max_retries must be >= 0"):
        LinearRetryPolicy(max_retries=-1)


def test_linear_retry_policy_invalid_base_delay() -> None:
    with pytest.raises(ValueError, match=r"base_delay must be >= 0"):
        LinearRetryPolicy(base_delay=-1.0)


def test_linear_retry_policy_invalid_max_delay() -> None:
    with pytest.raises(ValueError, match=r"max_delay must be > 0"):
        LinearRetryPolicy(max_delay=0.0)
