"""Global configuration for all tests."""

from collections.abc import Mapping
from typing import Any, Optional

import pytest

from models.http import HttpMethod, ResponseEntity
from request_context import RequestContext
from scenario_scope import ScenarioScope


class FakeTransport:
    """Transport returning canned responses and recording every request."""

    def __init__(self, response: Optional[ResponseEntity] = None) -> None:
        """Initialize with the response returned by send()."""
        self.response = response or ResponseEntity(status_code=200)
        self.requests: list[dict[str, Any]] = []

    def send(
        self,
        method: HttpMethod,
        uri: str,
        headers: Mapping[str, list[str]],
        body: Optional[Any] = None,
    ) -> ResponseEntity:
        """Record the request and return the canned response."""
        self.requests.append(
            {"method": method, "uri": uri, "headers": dict(headers), "body": body}
        )
        return self.response

    @property
    def last_request(self) -> dict[str, Any]:
        """Return the last recorded request."""
        return self.requests[-1]


def json_response(
    body: str, status_code: int = 200, headers: Optional[dict[str, list[str]]] = None
) -> ResponseEntity:
    """Build a response entity carrying a JSON body."""
    all_headers = {"Content-Type": ["application/json"]}
    all_headers.update(headers or {})
    return ResponseEntity(status_code=status_code, headers=all_headers, body=body)


@pytest.fixture(name="transport")
def transport_fixture() -> FakeTransport:
    """Fake transport answering 200 without body."""
    return FakeTransport()


@pytest.fixture(name="scope")
def scope_fixture() -> ScenarioScope:
    """Empty scenario scope."""
    return ScenarioScope()


@pytest.fixture(name="request_context")
def request_context_fixture(
    transport: FakeTransport, scope: ScenarioScope
) -> RequestContext:
    """Request context wired to the fake transport and scope."""
    return RequestContext(transport, scope)
