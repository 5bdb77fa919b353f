"""HTTP transport used to send the requests built by scenario steps."""

from collections.abc import Mapping
from typing import Any, Optional, Protocol

import requests

from log import get_logger
from models.config import TransportConfiguration
from models.http import HttpMethod, ResponseEntity
from utils.json_values import format_header_values

logger = get_logger(__name__)


class Transport(Protocol):
    """Anything able to perform one HTTP exchange."""

    def send(
        self,
        method: HttpMethod,
        uri: str,
        headers: Mapping[str, list[str]],
        body: Optional[Any] = None,
    ) -> ResponseEntity:
        """Send a request and return the complete response."""


def collect_headers(response: requests.Response) -> dict[str, list[str]]:
    """Return response headers with every value of repeated headers.

    ``requests`` folds repeated headers into one comma separated string; the
    urllib3 response underneath still knows the individual values.
    """
    raw_headers = getattr(response.raw, "headers", None)
    if raw_headers is not None and hasattr(raw_headers, "getlist"):
        return {name: list(raw_headers.getlist(name)) for name in raw_headers}
    return {name: [value] for name, value in response.headers.items()}


class RequestsTransport:
    """Transport backed by a ``requests`` session.

    The session is created on first use and kept until close(), so
    connections are reused between the scenarios of a test run. PATCH works
    like any other method.
    """

    def __init__(self, configuration: Optional[TransportConfiguration] = None) -> None:
        """Initialize the transport with optional configuration."""
        self._configuration = configuration or TransportConfiguration()
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        """Return the underlying session, creating it if needed."""
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def send(
        self,
        method: HttpMethod,
        uri: str,
        headers: Mapping[str, list[str]],
        body: Optional[Any] = None,
    ) -> ResponseEntity:
        """Send one request, transport errors propagate to the step.

        Parameters:
            method: HTTP method.
            uri: Absolute URI including the query string.
            headers: Header name to values; repeated values are joined.
            body: Parsed JSON body, serialized as JSON when not None.

        Returns:
            ResponseEntity: Status, headers and body text (None when empty).
        """
        request_headers = {
            name: format_header_values(values) for name, values in headers.items()
        }
        kwargs: dict[str, Any] = {
            "headers": request_headers,
            "timeout": self._configuration.timeout,
            "allow_redirects": self._configuration.allow_redirects,
        }
        if body is not None:
            kwargs["json"] = body

        response = self.session.request(str(method), uri, **kwargs)
        logger.info("%s %s -> %d", method, uri, response.status_code)

        return ResponseEntity(
            status_code=response.status_code,
            headers=collect_headers(response),
            body=response.text if response.content else None,
        )

    def close(self) -> None:
        """Close the session and release pooled connections."""
        if self._session is not None:
            self._session.close()
            self._session = None
