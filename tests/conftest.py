from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock, patch

import pytest

from retryexec.policy import ConstantRetryPolicy

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_wait() -> Generator[AsyncMock, None, None]:
    """Patch the cancellable wait between attempts to make tests run
    faster.

    The mock reports that the token was not cancelled during the wait.
    """
    with patch(
        "retryexec.cancellation.CancellationToken.wait_async",
        new_callable=AsyncMock,
        return_value=False,
    ) as mock:
        yield mock


@pytest.fixture
def mock_sink() -> Mock:
    """Create a mock notification sink for testing.

    Returns:
        A Mock object that can be used as a sink.
    """
    return Mock()


@pytest.fixture
def no_wait_policy() -> ConstantRetryPolicy:
    """Create a retry policy allowing 4 immediate retries."""
    return ConstantRetryPolicy(max_retries=4, delay=0.0)
