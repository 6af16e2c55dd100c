r"""Transient error classifiers.

A classifier decides whether an error raised by an operation is
transient (worth retrying) or fatal (propagated immediately). The
retry loop accepts any ``(error) -> bool`` callable; the classes in
this module are reusable, stateless implementations.
"""

from __future__ import annotations

__all__ = [
    "AllExceptApplicationErrors",
    "BaseErrorClassifier",
    "ErrorClassifier",
    "TransientErrorTypes",
]

from abc import ABC, abstractmethod
from collections.abc import Callable

from retryexec.exceptions import ApplicationError

ErrorClassifier = Callable[[Exception], bool]


class BaseErrorClassifier(ABC):
    """Abstract base class for transient error classifiers.

    Classifiers must be pure predicates: the same error always yields
    the same answer, and one instance can be shared across concurrent
    calls.
    """

    def __call__(self, error: Exception) -> bool:
        return self.is_transient(error)

    @abstractmethod
    def is_transient(self, error: Exception) -> bool:
        """Determine whether the error is a transient failure.

        Args:
            error: The error raised by the operation.

        Returns:
            ``True`` if a retry may succeed, ``False`` if the error is
            fatal and must be propagated without retrying.
        """


class AllExceptApplicationErrors(BaseErrorClassifier):
    """Classify every error as transient except ``ApplicationError``.

    This is the default classifier.

    Example:
        ```pycon
        >>> from retryexec.classifier import AllExceptApplicationErrors
        >>> from retryexec.exceptions import ApplicationError
        >>> classifier = AllExceptApplicationErrors()
        >>> classifier(TimeoutError("slow"))
        True
        >>> classifier(ApplicationError("invalid order"))
        False

        ```
    """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def is_transient(self, error: Exception) -> bool:
        return not isinstance(error, ApplicationError)


class TransientErrorTypes(BaseErrorClassifier):
    """Classify errors of the given types as transient.

    Every other error is fatal.

    Args:
        *error_types: The exception types considered transient.

    Raises:
        ValueError: If no exception type is given.

    Example:
        ```pycon
        >>> from retryexec.classifier import TransientErrorTypes
        >>> classifier = TransientErrorTypes(TimeoutError, ConnectionError)
        >>> classifier(ConnectionResetError())
        True
        >>> classifier(KeyError("missing"))
        False

        ```
    """

    def __init__(self, *error_types: type[Exception]) -> None:
        if not error_types:
            msg = "at least one exception type is required"
            raise ValueError(msg)
        self.error_types = error_types

    def __repr__(self) -> str:
        names = ", ".join(error_type.__qualname__ for error_type in self.error_types)
        return f"{self.__class__.__qualname__}({names})"

    def is_transient(self, error: Exception) -> bool:
        return isinstance(error, self.error_types)
