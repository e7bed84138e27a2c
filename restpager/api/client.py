"""
HTTP transport for REST API access.

ApiClient issues GET requests through a shared requests.Session and remembers
the last response so pagination metadata can be read after a resource call.
AbstractApi is the base class for resource APIs driven by ResultPager.
"""

from typing import Any, Dict, Optional
from urllib.parse import urljoin, urlparse

import requests

from ..core.config import API
from ..core.errors import (
    ConnectionError,
    InvalidArgumentError,
    NetworkError,
    TimeoutError,
    classify_api_error,
)
from ..core.logging import get_logger
from .response import ResponseMediator


logger = get_logger(__name__)


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        # HTTP-date form is not interpreted
        return None


class ApiClient:
    """
    Minimal REST client used as the pager's transport.

    Attributes:
        base_url: URL that relative request paths are joined to
        token: Access token sent in the PRIVATE-TOKEN header
        timeout: Request timeout in seconds
        session: Underlying requests session
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Base URL of the API (default: from config)
            token: Access token (default: from config)
            session: Session to reuse (default: a new requests.Session)
            timeout: Request timeout in seconds (default: from config)
            user_agent: User-Agent header value (default: from config)
        """
        base_url = base_url or API["BASE_URL"]
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.token = token if token is not None else API["TOKEN"]
        self.timeout = timeout or API["TIMEOUT"]
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({"User-Agent": user_agent or API["USER_AGENT"]})
        if self.token:
            self.session.headers.update({"PRIVATE-TOKEN": self.token})

        self._last_response: Optional[requests.Response] = None

        logger.debug(f"Initialized API client for {self.base_url}")

    def build_url(self, path_or_url: str) -> str:
        """Resolve a relative path against base_url; absolute URLs pass through."""
        if urlparse(path_or_url).scheme:
            return path_or_url
        return urljoin(self.base_url, path_or_url.lstrip("/"))

    def get(
        self,
        path_or_url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        """
        Issue a GET request.

        Args:
            path_or_url: Path relative to base_url, or an absolute cursor URL
            params: Query string parameters
            headers: Extra request headers

        Returns:
            The raw response

        Raises:
            TimeoutError: When the request times out
            ConnectionError: When the server cannot be reached
            NetworkError: For other transport failures
            APIError: When the server answers with a non-2xx status
        """
        url = self.build_url(path_or_url)
        logger.debug(f"GET {url} params={params}")

        try:
            response = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.warning(f"Request to {url} timed out: {str(e)}")
            raise TimeoutError(f"Request timed out: {str(e)}", {"url": url})
        except requests.exceptions.ConnectionError as e:
            logger.warning(f"Connection to {url} failed: {str(e)}")
            raise ConnectionError(f"Connection failed: {str(e)}", {"url": url})
        except requests.exceptions.RequestException as e:
            logger.warning(f"Request to {url} failed: {str(e)}")
            raise NetworkError(f"Request failed: {str(e)}", {"url": url})

        self._last_response = response

        if not response.ok:
            error = classify_api_error(
                response.status_code,
                ResponseMediator.get_error_message(response),
                _parse_retry_after(ResponseMediator.get_header(response, "Retry-After")),
            )
            logger.warning(f"GET {url} failed: {str(error)}")
            raise error

        return response

    def get_last_response(self) -> Optional[requests.Response]:
        """Return the most recent response received, if any."""
        return self._last_response

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class AbstractApi:
    """
    Base class for resource APIs.

    Subclasses expose list endpoints as methods built on _get; ResultPager calls
    per_page() before invoking such a method for the first page.
    """

    def __init__(self, client: ApiClient):
        self.client = client
        self._per_page: Optional[int] = None

    def per_page(self, value: Optional[int]) -> "AbstractApi":
        """
        Set the page size sent with subsequent requests.

        Args:
            value: Positive page size, or None to let the server decide

        Returns:
            self, so calls can be chained
        """
        if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 1):
            raise InvalidArgumentError(
                "per_page must be a positive integer or None", {"per_page": value}
            )
        self._per_page = value
        return self

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        params = dict(params or {})
        if self._per_page is not None:
            params.setdefault("per_page", self._per_page)

        response = self.client.get(path, params=params)
        return ResponseMediator.get_content(response)
