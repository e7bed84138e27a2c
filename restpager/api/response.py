"""
Helpers for reading raw HTTP responses.

The pager only ever looks at a response through ResponseMediator: the decoded
body, and the pagination relations advertised in the Link header.
"""

from typing import Any, Dict, Optional

import requests

from ..core.config import PAGINATION
from ..core.errors import DataError
from ..core.logging import get_logger


logger = get_logger(__name__)

JSON_CONTENT_TYPE = "application/json"


class ResponseMediator:
    """Static accessors over requests.Response objects."""

    @staticmethod
    def get_content(response: requests.Response) -> Any:
        """
        Decode the body of a response.

        JSON bodies are decoded, anything else is returned as text.

        Args:
            response: Raw response

        Returns:
            Decoded body, or None for an empty body

        Raises:
            DataError: When a JSON body cannot be decoded
        """
        if not response.content:
            return None

        content_type = ResponseMediator.get_header(response, "Content-Type") or ""
        media_type = content_type.split(";")[0].strip().lower()

        if media_type == JSON_CONTENT_TYPE or media_type.endswith("+json"):
            try:
                return response.json()
            except ValueError as e:
                raise DataError(
                    "Response body is not valid JSON",
                    {"url": response.url, "error": str(e)},
                )

        return response.text

    @staticmethod
    def get_pagination(response: requests.Response) -> Dict[str, str]:
        """
        Extract pagination relations from the Link header of a response.

        Args:
            response: Raw response

        Returns:
            Mapping of relation (first, prev, next, last) to cursor URL. Relations
            the response does not declare are omitted.
        """
        pagination = {}
        for rel, link in response.links.items():
            if rel in PAGINATION["RELATIONS"] and link.get("url"):
                pagination[rel] = link["url"]

        logger.debug(f"Pagination relations for {response.url}: {sorted(pagination)}")
        return pagination

    @staticmethod
    def get_header(response: requests.Response, name: str) -> Optional[str]:
        """Return a single header value, or None when absent."""
        return response.headers.get(name)

    @staticmethod
    def get_error_message(response: requests.Response) -> str:
        """
        Best-effort error message for a failed response.

        Args:
            response: Raw response

        Returns:
            The message carried by a JSON error body, otherwise the body text
        """
        try:
            content = ResponseMediator.get_content(response)
        except DataError:
            return response.text

        if isinstance(content, dict):
            for key in ("message", "error", "error_description"):
                if content.get(key):
                    return str(content[key])
        if content is None:
            return ""
        return str(content)
