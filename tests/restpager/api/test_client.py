"""Tests for ApiClient and AbstractApi."""

from unittest.mock import MagicMock

import pytest
import requests

from restpager.api.client import AbstractApi, ApiClient
from restpager.core.config import API
from restpager.core.errors import (
    APIError,
    ConnectionError,
    InvalidArgumentError,
    NetworkError,
    RateLimitError,
    ResourceNotFoundError,
    TimeoutError,
)
from tests.fixtures.pagination import BASE_URL, ITEMS_URL, ItemsApi, create_mock_session, create_response


@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return session


class TestApiClientSetup:
    """Construction and URL handling."""

    def test_base_url_gets_trailing_slash(self, session):
        client = ApiClient(base_url="https://api.example.com/v4", session=session)

        assert client.base_url == "https://api.example.com/v4/"

    def test_defaults_from_config(self, session):
        client = ApiClient(session=session)

        assert client.base_url.rstrip("/") == API["BASE_URL"].rstrip("/")
        assert client.timeout == API["TIMEOUT"]
        assert session.headers["User-Agent"] == API["USER_AGENT"]

    def test_token_header(self, session):
        ApiClient(base_url=BASE_URL, token="s3cret", session=session)

        assert session.headers["PRIVATE-TOKEN"] == "s3cret"

    def test_no_token_header_without_token(self, session):
        ApiClient(base_url=BASE_URL, token="", session=session)

        assert "PRIVATE-TOKEN" not in session.headers

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("items", ITEMS_URL),
            ("/items", ITEMS_URL),
            ("projects/1/issues", BASE_URL + "projects/1/issues"),
            ("https://other.example.com/x?page=2", "https://other.example.com/x?page=2"),
        ],
    )
    def test_build_url(self, session, path, expected):
        client = ApiClient(base_url=BASE_URL, session=session)

        assert client.build_url(path) == expected

    def test_context_manager_closes_session(self, session):
        with ApiClient(base_url=BASE_URL, session=session) as client:
            assert isinstance(client, ApiClient)

        session.close.assert_called_once()


class TestApiClientGet:
    """Requests, last response and error mapping."""

    def test_get_records_last_response(self, session):
        response = create_response([1, 2])
        session.get.return_value = response
        client = ApiClient(base_url=BASE_URL, session=session, timeout=7)

        assert client.get_last_response() is None
        assert client.get("items", params={"page": 1}) is response
        assert client.get_last_response() is response
        session.get.assert_called_once_with(ITEMS_URL, params={"page": 1}, headers=None, timeout=7)

    def test_not_found(self, session):
        session.get.return_value = create_response({"message": "404 Not found"}, status_code=404)
        client = ApiClient(base_url=BASE_URL, session=session)

        with pytest.raises(ResourceNotFoundError) as exc_info:
            client.get("items")

        assert exc_info.value.details["response_text"] == "404 Not found"
        assert client.get_last_response() is not None

    def test_too_many_requests_with_retry_after(self, session):
        session.get.return_value = create_response(
            {"message": "slow down"}, status_code=429, headers={"Retry-After": "30"}
        )
        client = ApiClient(base_url=BASE_URL, session=session)

        with pytest.raises(RateLimitError) as exc_info:
            client.get("items")

        assert exc_info.value.retry_after == 30.0

    def test_too_many_requests_with_http_date(self, session):
        session.get.return_value = create_response(
            None, status_code=429, headers={"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"}
        )
        client = ApiClient(base_url=BASE_URL, session=session)

        with pytest.raises(RateLimitError) as exc_info:
            client.get("items")

        assert exc_info.value.retry_after is None

    def test_server_error(self, session):
        session.get.return_value = create_response("oops", status_code=503, content_type="text/plain")
        client = ApiClient(base_url=BASE_URL, session=session)

        with pytest.raises(APIError) as exc_info:
            client.get("items")

        assert exc_info.value.details["status_code"] == 503

    @pytest.mark.parametrize(
        "raised,expected",
        [
            (requests.exceptions.ConnectTimeout("slow"), TimeoutError),
            (requests.exceptions.ReadTimeout("slow"), TimeoutError),
            (requests.exceptions.ConnectionError("refused"), ConnectionError),
            (requests.exceptions.TooManyRedirects("loop"), NetworkError),
        ],
    )
    def test_transport_failures(self, session, raised, expected):
        session.get.side_effect = raised
        client = ApiClient(base_url=BASE_URL, session=session)

        with pytest.raises(expected) as exc_info:
            client.get("items")

        assert exc_info.value.details["url"] == ITEMS_URL
        assert client.get_last_response() is None


class TestAbstractApi:
    """per_page hook and _get."""

    def test_per_page_is_chainable(self, api_client):
        api = ItemsApi(api_client)

        assert api.per_page(10) is api

    @pytest.mark.parametrize("value", [0, -1, True, "5"])
    def test_per_page_rejects_invalid_values(self, api_client, value):
        with pytest.raises(InvalidArgumentError):
            ItemsApi(api_client).per_page(value)

    def test_per_page_sent_as_query_parameter(self, api_client, mock_session):
        ItemsApi(api_client).per_page(25).all()

        assert mock_session.get.call_args.kwargs["params"] == {"per_page": 25}

    def test_per_page_none_sends_nothing(self, api_client, mock_session):
        api = ItemsApi(api_client).per_page(25)
        api.per_page(None).all()

        assert mock_session.get.call_args.kwargs["params"] == {}

    def test_explicit_per_page_parameter_wins(self, api_client, mock_session):
        class CustomApi(AbstractApi):
            def all(self):
                return self._get("items", {"per_page": 3})

        CustomApi(api_client).per_page(25).all()

        assert mock_session.get.call_args.kwargs["params"] == {"per_page": 3}

    def test_get_returns_decoded_content(self):
        responses = {ITEMS_URL: create_response([{"id": 1}])}
        client = ApiClient(base_url=BASE_URL, session=create_mock_session(responses))

        assert ItemsApi(client).all() == [{"id": 1}]
