"""Shared test fixtures for the linelog test suite."""

import pytest

from linelog import manager as _manager_mod
from linelog.clock import ParsedTime, TimeVal, time_encode
from linelog.sinks import CollectingSink


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "slow: multi-threaded or long-running tests")


# ---------------------------------------------------------------------------
# Time fixtures
# ---------------------------------------------------------------------------
# 2024-03-01 07:05:09.123 local time (a Friday)
FIXED_PARSED = ParsedTime(year=2024, mon=2, day=1, hour=7, min=5, sec=9,
                          msec=123, wday=5)


@pytest.fixture
def fixed_time():
    """TimeVal for 2024-03-01 07:05:09.123 in the local timezone."""
    return time_encode(FIXED_PARSED)


@pytest.fixture
def parsed_time():
    """ParsedTime for 2024-03-01 07:05:09.123."""
    return ParsedTime(year=2024, mon=2, day=1, hour=7, min=5, sec=9,
                      msec=123, wday=5)


class CountingClock:
    """Clock returning a fixed TimeVal and counting reads."""

    def __init__(self, tv):
        self.tv = tv
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.tv


class CountingIds:
    """pid/tid provider counting reads."""

    def __init__(self, value):
        self.value = value
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.value


@pytest.fixture
def clock(fixed_time):
    """A counting clock fixed at 2024-03-01 07:05:09.123 local."""
    return CountingClock(fixed_time)


@pytest.fixture
def epoch_clock():
    """A counting clock at a fixed epoch second."""
    return CountingClock(TimeVal(1_700_000_000, 5))


# ---------------------------------------------------------------------------
# Sink fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def sink():
    """A CollectingSink recording every dispatched line."""
    return CollectingSink()


# ---------------------------------------------------------------------------
# Singleton isolation
# ---------------------------------------------------------------------------
@pytest.fixture
def reset_logger():
    """Reset the module-level Logger singleton around a test."""
    old = _manager_mod._logger
    _manager_mod._logger = None
    yield
    _manager_mod._logger = old


# ---------------------------------------------------------------------------
# Process/thread id fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def pid():
    """Counting pid provider returning 42."""
    return CountingIds(42)


@pytest.fixture
def tid():
    """Counting tid provider returning a 7-digit id."""
    return CountingIds(1234567)
