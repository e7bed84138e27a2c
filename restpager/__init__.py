"""
restpager - REST API pagination with client side rate limiting

A small client core for link-header paginated REST APIs. It features:
- Eager and lazy traversal of list endpoints through first/prev/next/last cursors
- A client side rate limiter that paces requests below the server's limit
- A thin requests based transport
"""

import os

from .core.logging import configure_logging, get_logger, set_log_level


__version__ = "0.1.0"

# Libraries stay quiet unless asked; RESTPAGER_LOG_LEVEL turns logging on
if os.environ.get("RESTPAGER_LOG_LEVEL"):
    configure_logging(
        level=os.environ["RESTPAGER_LOG_LEVEL"],
        debug=os.environ.get("RESTPAGER_DEBUG", "").lower() == "true",
    )

from .api import AbstractApi, ApiClient, ResponseMediator
from .core.errors import (
    APIError,
    ConnectionError,
    DataError,
    InvalidArgumentError,
    NetworkError,
    RateLimitError,
    ResourceNotFoundError,
    RestPagerError,
    TimeoutError,
    UnsupportedPaginationError,
    ValidationError,
)
from .utils.network import RateLimiter, ResultPager, fetch_all, global_rate_limiter, rate_limited


__all__ = [
    "__version__",
    # Transport
    "ApiClient",
    "AbstractApi",
    "ResponseMediator",
    # Pagination and rate limiting
    "ResultPager",
    "fetch_all",
    "RateLimiter",
    "global_rate_limiter",
    "rate_limited",
    # Errors
    "RestPagerError",
    "ValidationError",
    "InvalidArgumentError",
    "DataError",
    "UnsupportedPaginationError",
    "APIError",
    "RateLimitError",
    "ResourceNotFoundError",
    "NetworkError",
    "ConnectionError",
    "TimeoutError",
    # Logging
    "configure_logging",
    "get_logger",
    "set_log_level",
]
