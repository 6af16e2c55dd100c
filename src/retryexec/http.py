r"""Transient error classifier for operations built on httpx.

Timeouts and transport errors raised by httpx are transient. A
``httpx.HTTPStatusError`` (raised by ``Response.raise_for_status``) is
transient only for the status codes that usually indicate a temporary
server condition.
"""

from __future__ import annotations

__all__ = ["RETRY_STATUS_CODES", "HttpTransientErrors"]

import httpx

from retryexec.classifier import BaseErrorClassifier

# HTTP status codes that should trigger automatic retry
# 429: Too Many Requests - Rate limiting
# 500: Internal Server Error - Temporary server issue
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


class HttpTransientErrors(BaseErrorClassifier):
    """Classify httpx failures as transient or fatal.

    Args:
        status_forcelist: HTTP status codes that are worth retrying.

    Example:
        ```pycon
        >>> import httpx
        >>> from retryexec.http import HttpTransientErrors
        >>> classifier = HttpTransientErrors()
        >>> classifier(httpx.ConnectTimeout("timed out"))
        True
        >>> request = httpx.Request("GET", "https://api.example.com/data")
        >>> response = httpx.Response(404, request=request)
        >>> classifier(httpx.HTTPStatusError("not found", request=request, response=response))
        False
        >>> classifier(ValueError("bad payload"))
        False

        ```
    """

    def __init__(self, status_forcelist: tuple[int, ...] = RETRY_STATUS_CODES) -> None:
        self.status_forcelist = status_forcelist

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(status_forcelist={self.status_forcelist})"

    def is_transient(self, error: Exception) -> bool:
        if isinstance(error, httpx.HTTPStatusError):
            return error.response.status_code in self.status_forcelist
        return isinstance(error, (httpx.TimeoutException, httpx.TransportError))
