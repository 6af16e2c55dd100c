r"""Utility functions supporting the retry engine.

This package provides parameter validation, the bridge running the
asynchronous retry loop from synchronous callers, and opt-in structured
logging helpers.
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "log_structured",
    "run_sync",
    "set_correlation_id",
    "validate_delay",
    "validate_retry_params",
]

from retryexec.utils.interop import run_sync
from retryexec.utils.structured_logging import (
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    log_structured,
    set_correlation_id,
)
from retryexec.utils.validation import validate_delay, validate_retry_params
