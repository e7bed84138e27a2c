"""
Rate limiting utilities for REST API access.

The remote service allows only a handful of requests per minute. Rather than
waiting for a 429 response, RateLimiter counts outgoing requests and blocks the
caller once the budget for the current window is used up.

Two policies are supported:
- "window": sleep for what is left of the window, measured from the oldest
  recorded request to now, plus a grace period
- "fixed": always sleep a full window once the budget is used up
"""

import threading
import time
from functools import wraps
from typing import Any, Callable, Dict, List, Optional, TypeVar, cast

from ...core.config import RATE_LIMIT
from ...core.errors import InvalidArgumentError
from ...core.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")

WINDOW_POLICY = "window"
FIXED_POLICY = "fixed"
POLICIES = (WINDOW_POLICY, FIXED_POLICY)


class RateLimiter:
    """
    Thread-safe client side rate limiter.

    Attributes:
        max_calls: Number of requests allowed per window
        window_size: Length of the window in seconds
        policy: "window" or "fixed"
        grace_period: Seconds added to a "window" delay
        call_timestamps: Instants of the requests recorded in the current window
        clock: Callable returning the current time in seconds
        sleep: Callable used to block the caller
        lock: Thread lock for synchronization
    """

    def __init__(
        self,
        max_calls: Optional[int] = None,
        window_size: Optional[float] = None,
        policy: Optional[str] = None,
        grace_period: Optional[float] = None,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        """
        Initialize the rate limiter.

        Args:
            max_calls: Requests allowed per window (default: from config)
            window_size: Window length in seconds (default: from config)
            policy: "window" or "fixed" (default: from config)
            grace_period: Seconds added to a window delay (default: from config)
            clock: Time source (default: time.monotonic)
            sleep: Blocking function (default: time.sleep)

        Raises:
            InvalidArgumentError: When a setting is out of range
        """
        self.max_calls = RATE_LIMIT["MAX_CALLS"] if max_calls is None else max_calls
        self.window_size = RATE_LIMIT["WINDOW_SIZE"] if window_size is None else window_size
        self.policy = (policy or RATE_LIMIT["POLICY"]).lower()
        self.grace_period = RATE_LIMIT["GRACE_PERIOD"] if grace_period is None else grace_period

        if isinstance(self.max_calls, bool) or not isinstance(self.max_calls, int) or self.max_calls < 1:
            raise InvalidArgumentError(
                "max_calls must be a positive integer", {"max_calls": self.max_calls}
            )
        if self.window_size <= 0:
            raise InvalidArgumentError(
                "window_size must be positive", {"window_size": self.window_size}
            )
        if self.grace_period < 0:
            raise InvalidArgumentError(
                "grace_period must not be negative", {"grace_period": self.grace_period}
            )
        if self.policy not in POLICIES:
            raise InvalidArgumentError(
                f"Unknown rate limit policy, expected one of {POLICIES}", {"policy": self.policy}
            )

        self.clock = clock or time.monotonic
        self.sleep = sleep or time.sleep

        self.call_timestamps: List[float] = []
        self.total_calls = 0
        self.blocked_count = 0
        self.total_delay_time = 0.0
        self.lock = threading.RLock()

        logger.debug(
            f"Initialized rate limiter with max_calls={self.max_calls}, "
            f"window_size={self.window_size}, policy={self.policy}"
        )

    def would_block(self) -> bool:
        """
        Check if recording a call now would block.

        Returns:
            True if the window already holds max_calls requests
        """
        with self.lock:
            return len(self.call_timestamps) >= self.max_calls

    def get_delay(self) -> float:
        """
        Compute the delay the next record_call would apply.

        Returns:
            Delay in seconds, 0 when the window still has room
        """
        with self.lock:
            if not self.call_timestamps or not self.would_block():
                return 0.0

            if self.policy == FIXED_POLICY:
                return float(self.window_size)

            # The call being decided is the newest instant of the window
            elapsed = self.clock() - self.call_timestamps[0]
            delay = self.window_size - elapsed + self.grace_period
            return max(0.0, float(delay))

    def record_call(self) -> None:
        """
        Record that a request was issued, blocking first if the budget is used up.

        When the window is full the caller is put to sleep for get_delay()
        seconds, the window is cleared and this call opens the next window.
        """
        with self.lock:
            self.total_calls += 1

            if not self.would_block():
                self.call_timestamps.append(self.clock())
                return

            delay = self.get_delay()
            if delay > 0:
                logger.warning(
                    f"Rate limit of {self.max_calls} calls per {self.window_size}s reached. "
                    f"Waiting {delay:.2f} seconds."
                )
                self.sleep(delay)
                self.blocked_count += 1
                self.total_delay_time += delay

            self.call_timestamps = [self.clock()]

    def reset(self) -> None:
        """Clear recorded calls and counters."""
        with self.lock:
            self.call_timestamps = []
            self.total_calls = 0
            self.blocked_count = 0
            self.total_delay_time = 0.0

        logger.debug("Rate limiter reset to initial state")

    def get_stats(self) -> Dict[str, Any]:
        """
        Get current rate limiter statistics.

        Returns:
            Dictionary containing configuration and counters
        """
        with self.lock:
            return {
                "max_calls": self.max_calls,
                "window_size": self.window_size,
                "policy": self.policy,
                "active_calls": len(self.call_timestamps),
                "total_calls": self.total_calls,
                "blocked_count": self.blocked_count,
                "total_delay_time": self.total_delay_time,
            }


class RateLimiterFactory:
    """Factory for creating rate limiter instances with dependency injection support."""

    def __init__(self, default_config: Optional[Dict[str, Any]] = None):
        """
        Initialize the rate limiter factory.

        Args:
            default_config: Default configuration for rate limiters
        """
        self.default_config = default_config or RATE_LIMIT
        self._instances: Dict[str, RateLimiter] = {}
        self._lock = threading.Lock()

    def _constructor_args(self, config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        final_config = dict(self.default_config)
        if config:
            final_config.update(config)

        constructor_args = {
            "max_calls": final_config.get("MAX_CALLS"),
            "window_size": final_config.get("WINDOW_SIZE"),
            "policy": final_config.get("POLICY"),
            "grace_period": final_config.get("GRACE_PERIOD"),
        }
        return {k: v for k, v in constructor_args.items() if v is not None}

    def get_rate_limiter(
        self, name: str = "default", config: Optional[Dict[str, Any]] = None
    ) -> RateLimiter:
        """
        Get or create a named rate limiter instance.

        Args:
            name: Name/identifier for the rate limiter
            config: Optional configuration overrides, used on first creation only

        Returns:
            RateLimiter instance
        """
        with self._lock:
            if name not in self._instances:
                constructor_args = self._constructor_args(config)
                self._instances[name] = RateLimiter(**constructor_args)
                logger.debug(f"Created rate limiter instance '{name}' with config: {constructor_args}")

            return self._instances[name]

    def create_rate_limiter(self, config: Optional[Dict[str, Any]] = None) -> RateLimiter:
        """
        Create a new rate limiter instance (not cached).

        Args:
            config: Configuration for the rate limiter

        Returns:
            New RateLimiter instance
        """
        return RateLimiter(**self._constructor_args(config))

    def clear_instances(self) -> None:
        """Clear all cached rate limiter instances (useful for testing)."""
        with self._lock:
            self._instances.clear()
            logger.debug("Cleared all rate limiter instances")


_default_rate_limiter_factory = RateLimiterFactory()

# Process-wide limiter shared by pagers that are not given their own
global_rate_limiter = _default_rate_limiter_factory.get_rate_limiter("global")


def rate_limited(
    func: Optional[Callable[..., T]] = None,
    *,
    limiter: Optional[RateLimiter] = None,
) -> Callable[..., T]:
    """
    Decorator that counts each successful call against a rate limiter.

    The call is recorded once the wrapped function has returned, so the caller
    is held back after the response that used up the budget. Failed calls are
    not counted.

    Args:
        func: Function to rate-limit
        limiter: Rate limiter to use (defaults to global_rate_limiter)

    Returns:
        Decorated function with rate limiting applied
    """

    def decorator(f: Callable[..., T]) -> Callable[..., T]:
        @wraps(f)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            result = f(*args, **kwargs)
            (limiter or global_rate_limiter).record_call()
            return result

        return cast(Callable[..., T], wrapper)

    # Handle the case where the decorator is used without parentheses
    if func is not None:
        return decorator(func)

    return decorator
