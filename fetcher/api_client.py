"""HTTP client for fetching JSON pages from an API."""
import logging
from typing import Any, Dict, Optional

import requests

from processor.errors import DecodeError, NetworkError
from processor.models import Stage
from reporter.log_reporter import Reporter

logger = logging.getLogger(__name__)


class ApiClient:
    """Client that fetches and decodes one JSON page per request."""

    DEFAULT_TIMEOUT = 30  # seconds

    def __init__(
        self,
        reporter: Reporter,
        method: str = 'GET',
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the API client.

        Args:
            reporter: Reporter notified before each request
            method: HTTP method used for every page (default: GET)
            headers: Headers sent with every request
            timeout: HTTP request timeout in seconds (default: DEFAULT_TIMEOUT)
            session: Optional requests session to reuse
        """
        self.reporter = reporter
        self.method = method
        self.headers = dict(headers or {})
        self.timeout = timeout if timeout is not None else self.DEFAULT_TIMEOUT
        self.session = session or requests.Session()

    def fetch_page(self, url: str, page: Optional[int] = None) -> Any:
        """
        Fetch a single page and decode its JSON body.

        Args:
            url: Page URL
            page: One-based page number, or None when pagination is not used

        Returns:
            Decoded JSON body

        Raises:
            NetworkError: If the request cannot be sent or gets no response
            DecodeError: If the body is empty or not valid JSON
        """
        context = {'url': url}
        if page is not None:
            context['page'] = page
        self.reporter.start(Stage.FETCH, context)

        try:
            response = self.session.request(
                self.method,
                url,
                headers=self.headers,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise NetworkError(f"Unable to fetch data from API! {url}: {e}") from e

        if not response.ok:
            logger.warning(
                f"API responded with HTTP {response.status_code} for {url}"
            )

        return self._decode(response)

    def _decode(self, response: requests.Response) -> Any:
        """
        Decode a response body as JSON.

        Args:
            response: HTTP response

        Returns:
            Decoded JSON body

        Raises:
            DecodeError: If the body is empty or not valid JSON
        """
        if not response.content:
            raise DecodeError("Unable to parse data from API! No data!")

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Unable to parse data from API! {e}") from e
