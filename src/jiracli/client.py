"""JIRA REST client.

Thin synchronous wrapper over httpx: every request carries the basic auth
header, GETs must come back 200, and writes report their raw status code.
"""

import urllib.parse

import httpx

from .credentials import Credentials
from .errors import TransportError, UnexpectedStatusError
from .logging import PerformanceTimer, get_logger
from .models import (
    DEFAULT_RESOLUTION_FIELD,
    Issue,
    SearchResultPage,
    decode_issue,
    decode_search,
)

logger = get_logger("client")


class JiraClient:
    """Client for the JIRA REST API v2."""

    def __init__(
        self,
        base_url: str,
        credentials: Credentials,
        resolution_field: str = DEFAULT_RESOLUTION_FIELD,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: API root, e.g. https://host/jira/rest/api/2.
            credentials: Basic auth credentials.
            resolution_field: Custom field holding the resolution comment.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = base_url.rstrip("/")
        self.resolution_field = resolution_field
        self._http = httpx.Client(headers=credentials.auth_header(), transport=transport)

    def __enter__(self) -> "JiraClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying connection pool."""
        self._http.close()

    # ==================== URLs ====================

    def issue_url(self, key: str) -> str:
        return f"{self.base_url}/issue/{key}"

    def comment_url(self, key: str) -> str:
        return f"{self.issue_url(key)}/comment"

    def assignee_url(self, key: str) -> str:
        return f"{self.issue_url(key)}/assignee"

    def search_url(self, jql: str) -> str:
        return f"{self.base_url}/search?{urllib.parse.urlencode({'jql': jql})}"

    # ==================== Raw requests ====================

    def get(self, url: str) -> bytes:
        """Authenticated GET returning the response body.

        Raises:
            TransportError: If no response was received.
            UnexpectedStatusError: If the status is not 200.
        """
        logger.debug(f"GET {url}")
        try:
            with PerformanceTimer("http_get", url=url) as timer:
                response = self._http.get(url)
                timer.add_metric("status", response.status_code)
        except httpx.HTTPError as e:
            logger.debug(f"GET {url} failed: {e}")
            raise TransportError(str(e)) from e

        if response.status_code != 200:
            logger.debug(f"GET {url} returned {response.status_code}")
            raise UnexpectedStatusError(url, response.status_code, response.reason_phrase)

        return response.content

    def request(self, method: str, url: str, payload: dict) -> int:
        """Authenticated request with a JSON body.

        Args:
            method: HTTP method (PUT or POST).
            url: Target URL.
            payload: Body, serialised as JSON.

        Returns:
            The response status code; the caller decides what counts as success.

        Raises:
            TransportError: If no response was received.
        """
        logger.debug(f"{method} {url} {payload}")
        try:
            with PerformanceTimer(f"http_{method.lower()}", url=url) as timer:
                response = self._http.request(
                    method,
                    url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                timer.add_metric("status", response.status_code)
        except httpx.HTTPError as e:
            logger.debug(f"{method} {url} failed: {e}")
            raise TransportError(str(e)) from e

        return response.status_code

    # ==================== Operations ====================

    def search(self, jql: str) -> SearchResultPage:
        """Run a JQL search and decode the first page."""
        return decode_search(self.get(self.search_url(jql)), self.resolution_field)

    def get_issue(self, key: str) -> Issue:
        """Fetch and decode one issue."""
        return decode_issue(self.get(self.issue_url(key)), self.resolution_field)

    def add_comment(self, key: str, body: str) -> int:
        """POST a comment; JIRA answers 201 on success."""
        return self.request("POST", self.comment_url(key), {"body": body})

    def assign(self, key: str, name: str | None) -> int:
        """PUT the assignee; ``None`` unassigns. JIRA answers 204 on success."""
        return self.request("PUT", self.assignee_url(key), {"name": name})

    def download(self, url: str) -> bytes:
        """Fetch attachment content."""
        with PerformanceTimer("download", url=url):
            return self.get(url)
