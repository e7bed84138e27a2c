"""
Error handling module for REST API access.

This module defines the exception hierarchy used throughout the package,
so callers can catch a single base class or a specific failure kind.
"""

from typing import Any, Dict, Optional


class RestPagerError(Exception):
    """
    Base class for all restpager errors.

    All exceptions raised by the package inherit from this class.

    Attributes:
        message: Error message
        details: Additional error details
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize a RestPagerError.

        Args:
            message: Error message
            details: Additional error details
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message

        detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({detail_str})"


class ValidationError(RestPagerError):
    """
    Error related to validation.

    Raised when an argument or configuration value is rejected.
    """

    pass


class InvalidArgumentError(ValidationError):
    """Error raised when a constructor or method argument is out of range."""

    pass


class DataError(RestPagerError):
    """
    Error related to data handling.

    Raised when a response body cannot be decoded or has the wrong shape.
    """

    pass


class UnsupportedPaginationError(DataError):
    """Error raised when an endpoint does not return a list-shaped result."""

    def __init__(
        self,
        message: str = "Pagination of this endpoint is not supported.",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)


class APIError(RestPagerError):
    """
    Error related to API requests.

    This class represents errors that occur during API requests,
    including network errors, rate limiting, and server errors.
    """

    pass


class RateLimitError(APIError):
    """
    Error related to rate limiting.

    Attributes:
        message: Error message
        retry_after: Suggested retry delay in seconds
        details: Additional error details
    """

    def __init__(
        self,
        message: str,
        retry_after: Optional[float] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize a RateLimitError.

        Args:
            message: Error message
            retry_after: Suggested retry delay in seconds
            details: Additional error details
        """
        self.retry_after = retry_after
        super().__init__(message, details)

    def __str__(self) -> str:
        base_str = super().__str__()
        if self.retry_after is not None:
            return f"{base_str} (retry after {self.retry_after} seconds)"
        return base_str


class ResourceNotFoundError(APIError):
    """Error related to resources not found (404)."""

    pass


class NetworkError(APIError):
    """Error related to network issues."""

    pass


class ConnectionError(NetworkError):
    """Error related to network connection issues."""

    pass


class TimeoutError(NetworkError):
    """Error related to request timeouts."""

    pass


def format_error_details(error: Exception) -> str:
    """
    Format error details for logging.

    Args:
        error: Exception object

    Returns:
        Formatted error details string
    """
    if isinstance(error, RestPagerError):
        if error.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
            return f"{error.__class__.__name__}: {error.message} ({detail_str})"
        return f"{error.__class__.__name__}: {error.message}"

    return f"{error.__class__.__name__}: {str(error)}"


def classify_api_error(
    status_code: int, response_text: str, retry_after: Optional[float] = None
) -> APIError:
    """
    Classify API error based on status code and response text.

    Args:
        status_code: HTTP status code
        response_text: Response text
        retry_after: Value of the Retry-After header in seconds, if any

    Returns:
        Appropriate APIError subclass instance
    """
    details = {
        "status_code": status_code,
        "response_text": response_text[:100] + ("..." if len(response_text) > 100 else ""),
    }

    if status_code == 404:
        return ResourceNotFoundError(f"Resource not found (status code: {status_code})", details)
    elif status_code == 429:
        return RateLimitError(
            f"Rate limit exceeded (status code: {status_code})", retry_after, details
        )
    elif status_code >= 500:
        return APIError(f"Server error (status code: {status_code})", details)
    elif status_code >= 400:
        return APIError(f"Client error (status code: {status_code})", details)
    else:
        return APIError(f"Unexpected API error (status code: {status_code})", details)
