"""
Utility modules for restpager.

This package provides utilities organized by category:
- network: Rate limiting and pagination utilities
"""

from .network import RateLimiter, ResultPager, global_rate_limiter, rate_limited


__all__ = [
    "RateLimiter",
    "ResultPager",
    "global_rate_limiter",
    "rate_limited",
]
