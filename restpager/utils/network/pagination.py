"""
Pagination utilities for API requests.

This module walks list endpoints that paginate through Link headers. The first
page comes from a resource API method; every later page is fetched by following
a cursor URL (first, prev, next, last) taken from the previous response.
"""

from typing import Any, Dict, Iterator, List, Optional, Sequence

from ...api.client import AbstractApi, ApiClient
from ...api.response import ResponseMediator
from ...core.config import PAGINATION
from ...core.errors import InvalidArgumentError, UnsupportedPaginationError
from ...core.logging import get_logger
from .rate_limiter import RateLimiter, global_rate_limiter


logger = get_logger(__name__)


class ResultPager:
    """
    Walker over link-header paginated results.

    Pagination state is rebuilt from the last response after every fetch and is
    only ever modified by the pager itself. A pager runs one traversal at a time.

    Attributes:
        client: Transport used for cursor requests and last-response lookup
        per_page: Number of entries requested per page
        rate_limiter: Limiter told about every completed page
        pause_every: Force a pause every N completed pages (0 disables)
        pause_seconds: Length of that pause in seconds
    """

    def __init__(
        self,
        client: ApiClient,
        per_page: Optional[int] = None,
        rate_limiter: Optional[RateLimiter] = None,
        pause_every: Optional[int] = None,
        pause_seconds: Optional[float] = None,
    ):
        """
        Initialize the result pager.

        Args:
            client: API client
            per_page: Entries per page (default: from config)
            rate_limiter: Rate limiter (default: global_rate_limiter)
            pause_every: Pause after every N completed pages (default: from config)
            pause_seconds: Pause length in seconds (default: from config)

        Raises:
            InvalidArgumentError: When per_page is not a positive integer
        """
        if per_page is None:
            per_page = PAGINATION["PAGE_SIZE"]

        if isinstance(per_page, bool) or not isinstance(per_page, int) or per_page < 1:
            raise InvalidArgumentError(
                "per_page must be a positive integer or None", {"per_page": per_page}
            )

        self.client = client
        self.per_page = per_page
        self.rate_limiter = rate_limiter or global_rate_limiter
        self.pause_every = PAGINATION["PAUSE_EVERY_PAGES"] if pause_every is None else pause_every
        self.pause_seconds = (
            PAGINATION["PAUSE_SECONDS"] if pause_seconds is None else pause_seconds
        )

        self._pagination: Dict[str, str] = {}
        self._page_count = 0

        logger.debug(f"Initialized result pager with per_page={self.per_page}")

    @property
    def pagination(self) -> Dict[str, str]:
        """Copy of the relations advertised by the last response."""
        return dict(self._pagination)

    @property
    def page_count(self) -> int:
        """Pages completed in the current lazy traversal."""
        return self._page_count

    def fetch_all(
        self, api: AbstractApi, method: str, parameters: Optional[Sequence[Any]] = None
    ) -> List[Any]:
        """
        Fetch all results from an api call.

        Args:
            api: Resource API
            method: Name of the list method on the API
            parameters: Positional arguments for that method

        Returns:
            Every item of every page, in page order

        Raises:
            UnsupportedPaginationError: When a page is not list-shaped
        """
        return list(self.fetch_all_lazy(api, method, parameters))

    def fetch_all_lazy(
        self, api: AbstractApi, method: str, parameters: Optional[Sequence[Any]] = None
    ) -> Iterator[Any]:
        """
        Lazily fetch all results from an api call.

        A page is requested only once the consumer has exhausted the previous
        one, so stopping early leaves the remaining pages unfetched.

        Args:
            api: Resource API
            method: Name of the list method on the API
            parameters: Positional arguments for that method

        Yields:
            Items one at a time, in page order

        Raises:
            UnsupportedPaginationError: When a page is not list-shaped
        """
        self._page_count = 0
        logger.debug(f"Starting lazy traversal of {type(api).__name__}.{method}")

        yield from self.fetch(api, method, parameters)
        self._page_completed()

        while self.has_next():
            yield from self.fetch_next()
            self._page_completed()

        logger.debug(f"Traversal of {type(api).__name__}.{method} done after {self._page_count} pages")

    def fetch(
        self, api: AbstractApi, method: str, parameters: Optional[Sequence[Any]] = None
    ) -> List[Any]:
        """
        Fetch a single page from an api call.

        Args:
            api: Resource API
            method: Name of the list method on the API
            parameters: Positional arguments for that method

        Returns:
            Items of the first page

        Raises:
            InvalidArgumentError: When the API has no such method
            UnsupportedPaginationError: When the result is not list-shaped
        """
        api_method = getattr(api.per_page(self.per_page), method, None)
        if not callable(api_method):
            raise InvalidArgumentError(
                f"{type(api).__name__} has no method {method!r}", {"method": method}
            )

        result = api_method(*(parameters or ()))

        if not isinstance(result, list):
            raise UnsupportedPaginationError(details={"method": method})

        self._post_fetch()
        return result

    def has_next(self) -> bool:
        return "next" in self._pagination

    def has_previous(self) -> bool:
        return "prev" in self._pagination

    def fetch_next(self) -> List[Any]:
        """Fetch the next page, or [] when there is none."""
        return self._get("next")

    def fetch_previous(self) -> List[Any]:
        """Fetch the previous page, or [] when there is none."""
        return self._get("prev")

    def fetch_first(self) -> List[Any]:
        """Fetch the first page, or [] when it is not advertised."""
        return self._get("first")

    def fetch_last(self) -> List[Any]:
        """Fetch the last page, or [] when it is not advertised."""
        return self._get("last")

    def _get(self, key: str) -> List[Any]:
        cursor = self._pagination.get(key)
        if cursor is None:
            return []

        logger.debug(f"Fetching {key} page: {cursor}")
        response = self.client.get(cursor)
        content = ResponseMediator.get_content(response)

        if not isinstance(content, list):
            raise UnsupportedPaginationError(details={"relation": key, "url": cursor})

        self._post_fetch()
        return content

    def _post_fetch(self) -> None:
        response = self.client.get_last_response()
        self._pagination = {} if response is None else ResponseMediator.get_pagination(response)

    def _page_completed(self) -> None:
        self._page_count += 1
        self.rate_limiter.record_call()

        if self.pause_every > 0 and self._page_count % self.pause_every == 0:
            logger.warning(
                f"Completed {self._page_count} pages, pausing for {self.pause_seconds} seconds"
            )
            self.rate_limiter.sleep(self.pause_seconds)


def fetch_all(
    client: ApiClient,
    api: AbstractApi,
    method: str,
    parameters: Optional[Sequence[Any]] = None,
    **pager_kwargs: Any,
) -> List[Any]:
    """
    Fetch every page of a list endpoint.

    This is a convenience wrapper that builds a ResultPager and runs an eager
    traversal with it.

    Args:
        client: API client
        api: Resource API
        method: Name of the list method on the API
        parameters: Positional arguments for that method
        **pager_kwargs: Passed on to ResultPager

    Returns:
        Every item of every page, in page order
    """
    pager = ResultPager(client, **pager_kwargs)
    return pager.fetch_all(api, method, parameters)
