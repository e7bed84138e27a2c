"""
Core functionality for restpager.

This module contains the foundational components of the package:
- Config: Centralized configuration settings
- Errors: Error hierarchy and handling utilities
- Logging: Logging configuration and utilities
"""

from .errors import (
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
    classify_api_error,
    format_error_details,
)
from .logging import configure_logging, get_logger, setup_logging


__all__ = [
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
    "classify_api_error",
    "format_error_details",
    # Logging
    "get_logger",
    "setup_logging",
    "configure_logging",
]
