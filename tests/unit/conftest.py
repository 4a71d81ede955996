from unittest.mock import AsyncMock

import pytest

from explorer.executors.retry_executor import RetryExecutor
from tests.unit.chain_data import FakeTransport


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def no_sleep():
    return AsyncMock()


@pytest.fixture
def retry_executor(no_sleep):
    return RetryExecutor(max_retries=2, base_delay=0.5, sleep=no_sleep)
