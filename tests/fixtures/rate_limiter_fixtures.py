"""Shared test fixtures for rate limiter tests.

Time is simulated with FakeClock so no test ever waits for real.
"""

from typing import List

import pytest

from restpager.utils.network.rate_limiter import RateLimiter


class FakeClock:
    """Controllable clock; sleep() advances time instead of blocking."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock():
    """Create a fresh fake clock for each test."""
    return FakeClock()


@pytest.fixture
def fresh_rate_limiter(fake_clock):
    """Create a 5 calls per 60 seconds window limiter driven by the fake clock."""
    return RateLimiter(
        max_calls=5,
        window_size=60,
        policy="window",
        grace_period=1,
        clock=fake_clock,
        sleep=fake_clock.sleep,
    )


@pytest.fixture
def fixed_rate_limiter(fake_clock):
    """Create a 5 calls then 60 seconds fixed-interval limiter driven by the fake clock."""
    return RateLimiter(
        max_calls=5,
        window_size=60,
        policy="fixed",
        clock=fake_clock,
        sleep=fake_clock.sleep,
    )


@pytest.fixture
def roomy_rate_limiter(fake_clock):
    """Create a limiter that never blocks within a test."""
    return RateLimiter(max_calls=1000, window_size=60, clock=fake_clock, sleep=fake_clock.sleep)
