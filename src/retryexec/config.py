r"""Configuration dataclass and defaults for RetryExecutor.

This module provides the configuration object holding the three
strategies injected into the retry loop: the retry policy, the
transient error classifier and the notification sink.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BASE_DELAY",
    "DEFAULT_MAX_RETRIES",
    "ExecutorConfig",
]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from retryexec.classifier import AllExceptApplicationErrors
from retryexec.policy import default_retry_policy
from retryexec.policy.base import DEFAULT_BASE_DELAY, DEFAULT_MAX_RETRIES
from retryexec.sink import default_message

if TYPE_CHECKING:
    from retryexec.classifier import ErrorClassifier
    from retryexec.policy import RetryPolicy
    from retryexec.sink import NotificationSink


@dataclass(frozen=True)
class ExecutorConfig:
    """Configuration for RetryExecutor.

    The strategies may be shared by many concurrent calls, so they must
    be stateless or internally synchronized.

    Args:
        retry_policy: Callable ``(attempt, error) -> (retry, delay)``.
            Defaults to a linear policy with 10 retries and 1s unit.
        classifier: Callable ``(error) -> bool`` returning ``True`` for
            transient errors. Defaults to every error except
            ``ApplicationError``.
        sink: Callable ``(attempts, operation, succeeded)`` invoked once
            per call. Defaults to a warning line when retries happened.

    Example:
        ```pycon
        >>> from retryexec.config import ExecutorConfig
        >>> from retryexec.policy import ConstantRetryPolicy
        >>> config = ExecutorConfig()
        >>> config.retry_policy
        LinearRetryPolicy(max_retries=10, base_delay=1.0, max_delay=None)
        >>> merged = config.merge(retry_policy=ConstantRetryPolicy(max_retries=2, delay=0.0))
        >>> merged.retry_policy
        ConstantRetryPolicy(max_retries=2, delay=0.0)
        >>> merged.classifier is config.classifier
        True

        ```
    """

    retry_policy: RetryPolicy = field(default_factory=default_retry_policy)
    classifier: ErrorClassifier = field(default_factory=AllExceptApplicationErrors)
    sink: NotificationSink = default_message

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            TypeError: If a strategy is not callable.
        """
        for name in ("retry_policy", "classifier", "sink"):
            if not callable(getattr(self, name)):
                msg = f"{name} must be callable, got {getattr(self, name)!r}"
                raise TypeError(msg)

    def merge(self, **overrides: Any) -> ExecutorConfig:
        """Create a new config with specified strategies overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for strategies to override.

        Returns:
            A new ExecutorConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary with the three strategies.
        """
        return {
            "retry_policy": self.retry_policy,
            "classifier": self.classifier,
            "sink": self.sink,
        }
