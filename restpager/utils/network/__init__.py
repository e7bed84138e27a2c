"""
Network utilities for restpager.

This module provides utilities for network communication, namely client side
rate limiting and link-header pagination.
"""

from .pagination import ResultPager, fetch_all
from .rate_limiter import RateLimiter, RateLimiterFactory, global_rate_limiter, rate_limited


__all__ = [
    # Rate limiting
    "RateLimiter",
    "RateLimiterFactory",
    "rate_limited",
    "global_rate_limiter",
    # Pagination
    "ResultPager",
    "fetch_all",
]
