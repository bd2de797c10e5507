from __future__ import annotations

import pytest

from kbootstrap.retry import RetryPolicy, WaitPolicy

from tests.custom_types import RecordingSleeper


@pytest.fixture
def sleeper():
	return RecordingSleeper()


@pytest.fixture
def retry_policy():
	return RetryPolicy(initial_interval_ms=100, max_interval_ms=400, multiplier=2.0, max_attempts=3)


@pytest.fixture
def wait_policy():
	return WaitPolicy(sleep_ms=100, multiplier=2.0, max_attempts=3)
