"""
Test fixtures for pagination testing.

A simulated server is a dict mapping request URLs to prepared
requests.Response objects; a MagicMock session serves them to a real ApiClient.
"""

import json
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import MagicMock

import pytest
import requests

from restpager.api.client import AbstractApi, ApiClient
from restpager.utils.network.pagination import ResultPager


BASE_URL = "https://api.example.com/v4/"
ITEMS_URL = BASE_URL + "items"


class ItemsApi(AbstractApi):
    """Resource API used by the tests."""

    def all(self, *args):
        return self._get("items")

    def search(self, term):
        return self._get("items", {"search": term})

    def show(self, item_id):
        return self._get(f"items/{item_id}")


def create_link_header(links: Dict[str, str]) -> str:
    """Render a Link header from a relation to URL mapping."""
    return ", ".join(f'<{url}>; rel="{rel}"' for rel, url in links.items())


def create_response(
    content: Any,
    links: Optional[Dict[str, str]] = None,
    url: str = ITEMS_URL,
    status_code: int = 200,
    content_type: str = "application/json",
    headers: Optional[Dict[str, str]] = None,
) -> requests.Response:
    """
    Build a requests.Response without touching the network.

    Args:
        content: Body; serialized to JSON when content_type is JSON
        links: Pagination relations for the Link header
        url: URL the response claims to come from
        status_code: HTTP status
        content_type: Content-Type header value
        headers: Extra headers

    Returns:
        Prepared response
    """
    response = requests.Response()
    response.status_code = status_code
    response.reason = "OK" if status_code < 400 else "Error"
    response.url = url
    response.encoding = "utf-8"

    if content is None:
        response._content = b""
    elif isinstance(content, (bytes, str)):
        response._content = content.encode("utf-8") if isinstance(content, str) else content
    else:
        response._content = json.dumps(content).encode("utf-8")

    response.headers["Content-Type"] = content_type
    if links:
        response.headers["Link"] = create_link_header(links)
    for name, value in (headers or {}).items():
        response.headers[name] = value

    return response


def create_paginated_responses(
    num_pages: int = 3, items_per_page: int = 2
) -> Tuple[Dict[str, requests.Response], List[Dict[str, int]]]:
    """
    Create a simulated paginated endpoint.

    Every page advertises first and last; next and prev only where they exist.

    Returns:
        (responses keyed by URL, all items in page order)
    """
    responses = {}
    all_items = []

    def page_url(page: int) -> str:
        return f"{ITEMS_URL}?page={page}"

    item_id = 1
    for page in range(1, num_pages + 1):
        items = [{"id": item_id + i} for i in range(items_per_page)]
        item_id += items_per_page
        all_items.extend(items)

        links = {"first": page_url(1), "last": page_url(num_pages)}
        if page > 1:
            links["prev"] = page_url(page - 1)
        if page < num_pages:
            links["next"] = page_url(page + 1)

        responses[page_url(page)] = create_response(items, links, url=page_url(page))

    # The initial request goes to the bare resource URL
    responses[ITEMS_URL] = responses[page_url(1)]
    return responses, all_items


def create_mock_session(responses: Dict[str, requests.Response]) -> MagicMock:
    """Create a session whose get() serves responses by URL."""
    session = MagicMock(spec=requests.Session)
    session.headers = {}

    def get(url, params=None, headers=None, timeout=None):
        return responses[url]

    session.get.side_effect = get
    return session


@pytest.fixture
def paginated_responses():
    """Three pages of two items each."""
    return create_paginated_responses(num_pages=3, items_per_page=2)


@pytest.fixture
def mock_session(paginated_responses):
    responses, _ = paginated_responses
    return create_mock_session(responses)


@pytest.fixture
def api_client(mock_session):
    return ApiClient(base_url=BASE_URL, session=mock_session, timeout=5)


@pytest.fixture
def items_api(api_client):
    return ItemsApi(api_client)


@pytest.fixture
def pager(api_client, roomy_rate_limiter):
    return ResultPager(api_client, per_page=2, rate_limiter=roomy_rate_limiter)
