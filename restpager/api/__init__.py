"""
HTTP transport for restpager.

This module provides the client the pager talks to and the helpers used to
read pagination metadata from its responses.
"""

from .client import AbstractApi, ApiClient
from .response import ResponseMediator


__all__ = [
    "ApiClient",
    "AbstractApi",
    "ResponseMediator",
]
