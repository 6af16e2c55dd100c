r"""Exception types raised by the retry engine.

The engine never wraps the error of a failed operation: when the last
attempt fails, or when an error is classified as fatal, the original
exception is re-raised with its traceback. The types defined here cover
the two cases that are not an operation failure.
"""

from __future__ import annotations

__all__ = ["ApplicationError", "RetryCancelledError"]


class ApplicationError(Exception):
    """Error signaling a business rule violation rather than a fault.

    The default classifier never retries an ``ApplicationError`` (or a
    subclass), so raising it from an operation stops the retry loop
    after the first attempt.

    Example:
        ```pycon
        >>> from retryexec.exceptions import ApplicationError
        >>> class InsufficientFundsError(ApplicationError): ...
        ...
        >>> isinstance(InsufficientFundsError("balance too low"), ApplicationError)
        True

        ```
    """


class RetryCancelledError(Exception):
    """Exception raised when the retry loop observes a cancellation.

    This is deliberately not a subclass of the error raised by the
    operation, so a cancelled call can always be told apart from a call
    whose retries were exhausted.

    Args:
        message: Error message describing the cancellation.
        attempts: Number of failed attempts before the cancellation
            was observed.
        last_error: The last error raised by the operation, if any.

    Attributes:
        attempts: Number of failed attempts before the cancellation.
        last_error: The last error raised by the operation, if any.

    Example:
        ```pycon
        >>> from retryexec.exceptions import RetryCancelledError
        >>> error = RetryCancelledError(attempts=2, last_error=TimeoutError("slow"))
        >>> error.attempts
        2
        >>> str(error)
        'Retry loop cancelled after 2 failed attempts'

        ```
    """

    def __init__(
        self,
        message: str | None = None,
        *,
        attempts: int = 0,
        last_error: Exception | None = None,
    ) -> None:
        if message is None:
            message = f"Retry loop cancelled after {attempts} failed attempts"
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error
