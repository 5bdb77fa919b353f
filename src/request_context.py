"""Request building, sending and response checks for one scenario.

RequestContext accumulates the request described by the Given steps (base
URI, headers, query parameters, body), sends it when a When step asks for it
and keeps the response for the Then steps. Values checked by a step can be
stored in the ScenarioScope and referenced by later steps as
`` `$alias` ``.
"""

import json
from collections.abc import Mapping
from typing import Any, Optional
from urllib.parse import urlencode

from requests.structures import CaseInsensitiveDict

from client import Transport
from constants import NO_SIZE_CHECK, ScopeKind
from log import get_logger
from models.config import ScenarioConfiguration
from models.http import HttpMethod, ResponseEntity
from scenario_scope import ScenarioScope
from utils.checks import (
    MissingResponseError,
    StepPreconditionError,
    require_not_empty,
    require_not_none,
    verify,
)
from utils.dynamic_parameters import resolve_dynamic_parameters
from utils.json_path import PathNotFoundError, evaluate
from utils.json_values import (
    format_header_values,
    format_value,
    json_equal,
    scalar_matches,
)
from utils.types import (
    JsonPathValue,
    JsonScalar,
    JsonSequence,
    raw_value,
    to_json_path_value,
)

logger = get_logger(__name__)


class RequestContext:  # pylint: disable=too-many-public-methods
    """Mutable request and response state of a single scenario."""

    def __init__(
        self,
        transport: Transport,
        scope: ScenarioScope,
        settings: Optional[ScenarioConfiguration] = None,
    ) -> None:
        """Initialize the context.

        Parameters:
            transport: Sends the requests.
            scope: Scenario scope shared with nothing but this scenario.
            settings: Base URI, default headers and substitution limits.
        """
        self._transport = transport
        self._scope = scope
        self._settings = settings or ScenarioConfiguration()

        self.base_uri: str = self._settings.base_uri
        self.body: Optional[Any] = None
        self.headers: CaseInsensitiveDict = CaseInsensitiveDict()
        self.query_params: dict[str, str] = {}
        self._response: Optional[ResponseEntity] = None

        for name, value in self._settings.default_headers.items():
            self.headers[name] = [value]

    @property
    def scope(self) -> ScenarioScope:
        """Scenario scope used for stored values."""
        return self._scope

    @property
    def response(self) -> ResponseEntity:
        """Response of the last request."""
        if self._response is None:
            raise MissingResponseError(
                "No response available, a request has to be performed first"
            )
        return self._response

    @property
    def has_response(self) -> bool:
        """Tell whether a request has been performed."""
        return self._response is not None

    def _resolve(self, value: str, kind: ScopeKind) -> str:
        """Substitute dynamic parameters using one kind of stored values."""
        if kind == ScopeKind.HEADER:
            return resolve_dynamic_parameters(
                value,
                self._scope.snapshot(kind),
                self._settings.max_substitutions,
                formatter=format_header_values,
            )
        return resolve_dynamic_parameters(
            value, self._scope.snapshot(kind), self._settings.max_substitutions
        )

    # request building

    def set_base_uri(self, base_uri: str) -> None:
        """Set the URI prepended to every requested resource."""
        self.base_uri = require_not_none(base_uri, "base uri")

    def set_header(self, name: str, value: str) -> None:
        """Set a request header, replacing previous values.

        Dynamic parameters in the value are resolved with stored headers.
        """
        require_not_empty(name, "header name")
        require_not_empty(value, "header value")
        self.headers[name] = [self._resolve(value, ScopeKind.HEADER)]
        logger.debug("Header %s set", name)

    def add_headers(self, headers: Mapping[str, str]) -> None:
        """Add request headers, appending to values already present."""
        require_not_empty(headers, "headers")
        for name, value in headers.items():
            require_not_empty(name, "header name")
            self.headers.setdefault(name, []).append(value)
            logger.debug("Header %s added", name)

    def add_query_parameters(self, params: Mapping[str, str]) -> None:
        """Add query parameters, a parameter given twice keeps the last value."""
        require_not_empty(params, "query parameters")
        self.query_params.update(params)

    def set_body(self, body: str) -> None:
        """Set the JSON body sent by POST, PUT and PATCH requests.

        Dynamic parameters are resolved with stored JSON path values before
        the text is parsed; invalid JSON raises json.JSONDecodeError.
        """
        require_not_empty(body, "body")
        self.body = json.loads(self._resolve(body, ScopeKind.JSON_PATH))

    def build_uri(self, resource: str) -> str:
        """Return base URI, resource and encoded query parameters."""
        uri = self.base_uri + resource
        if not self.query_params:
            return uri
        separator = "&" if "?" in uri else "?"
        return uri + separator + urlencode(self.query_params)

    def request(self, resource: str, method: HttpMethod | str) -> ResponseEntity:
        """Send the request and keep its response.

        Parameters:
            resource: Path appended to the base URI, may contain dynamic
                parameters resolved with stored JSON path values.
            method: HTTP method; the body is only sent for POST, PUT, PATCH.

        Returns:
            ResponseEntity: The response, also available as ``response``.
        """
        require_not_empty(resource, "resource")
        require_not_none(method, "method")
        try:
            method = HttpMethod(str(method).upper())
        except ValueError as e:
            raise StepPreconditionError(f"Unsupported HTTP method {method}") from e

        uri = self.build_uri(self._resolve(resource, ScopeKind.JSON_PATH))
        body = self.body if method.sends_body else None

        self._response = None
        self._response = self._transport.send(method, uri, dict(self.headers), body)
        return self._response

    # response checks

    def check_status(self, status: int, is_not: bool = False) -> None:
        """Check the response status code equals (or differs from) status."""
        if status is None or status <= 0:
            raise StepPreconditionError(
                f"Expected status must be a positive number, got {status}"
            )
        actual = self.response.status_code
        if is_not:
            verify(
                actual != status,
                f"Expected status other than {status}, got {actual}",
            )
        else:
            verify(actual == status, f"Expected status {status}, got {actual}")

    def check_header_exists(
        self, name: str, is_not: bool = False
    ) -> Optional[list[str]]:
        """Check a response header is present (or absent).

        Returns:
            All values of the header when checking presence, None otherwise.
        """
        require_not_empty(name, "header name")
        values = self.response.header_values(name)
        if is_not:
            verify(values is None, f"Header {name} should not exist, found {values}")
            return None
        verify(values is not None, f"Header {name} should exist")
        return values

    def check_header_equal(self, name: str, value: str, is_not: bool = False) -> None:
        """Check the first value of a response header contains (or lacks) value."""
        require_not_empty(name, "header name")
        require_not_empty(value, "header value")
        actual = self.response.first_header(name)
        verify(actual is not None, f"Header {name} is not present in the response")
        if is_not:
            verify(
                value not in actual,
                f"Header {name} should not contain '{value}', got '{actual}'",
            )
        else:
            verify(
                value in actual,
                f"Header {name} should contain '{value}', got '{actual}'",
            )

    def check_json_body(self) -> None:
        """Check the response body is valid JSON."""
        body = self.response.body
        verify(bool(body), "Response body is empty")
        try:
            json.loads(body)
        except json.JSONDecodeError as e:
            raise AssertionError(f"Response body is not valid JSON: {e}") from e

    def check_body_contains(self, text: str) -> None:
        """Check the raw response body contains text."""
        require_not_empty(text, "body value")
        body = self.response.body or ""
        verify(
            text in body, f"Response body should contain '{text}', got '{body}'"
        )

    def get_json_path(self, path: str) -> Optional[JsonPathValue]:
        """Evaluate a JSON path against the response body.

        Returns:
            The tagged value found at path, or None when the response has no
            body at all.

        Raises:
            PathNotFoundError: A definite path selects nothing.
        """
        require_not_empty(path, "json path")
        body = self.response.body
        if body is None:
            return None

        value = evaluate(body, path)
        verify(value is not None, f"Value at json path {path} is null")
        return to_json_path_value(value)

    def check_json_path_exists(self, path: str) -> Optional[JsonPathValue]:
        """Check a JSON path selects a non-null value and return it."""
        return self.get_json_path(path)

    def check_json_path_doesnt_exist(self, path: str) -> None:
        """Check a JSON path is absent from the response body.

        By default only the path itself is validated and its absence is not
        verified; set ``strict_json_path_absence`` to actually evaluate it.
        """
        require_not_empty(path, "json path")
        if not self._settings.strict_json_path_absence:
            logger.debug("Absence of json path %s is not verified", path)
            return

        body = self.response.body
        if body is None:
            return
        try:
            value = evaluate(body, path)
        except PathNotFoundError:
            return
        verify(value == [], f"Json path {path} should not exist, found {value!r}")

    def _required_json_path(self, path: str) -> JsonPathValue:
        value = self.get_json_path(path)
        verify(value is not None, f"Response has no body to evaluate json path {path}")
        return value

    def check_json_path(self, path: str, expected: str, is_not: bool = False) -> None:
        """Check the value at a JSON path equals (or differs from) expected.

        Arrays are compared with the expected text parsed as JSON. Single
        values are compared with the expected text parsed as JSON when it is
        valid JSON, as plain text otherwise.
        """
        require_not_none(expected, "expected value")
        value = self._required_json_path(path)

        match value:
            case JsonSequence(items=items):
                verify(bool(items), f"Json path {path} is an empty array")
                equal = json_equal(items, json.loads(expected))
            case JsonScalar(value=scalar):
                verify(format_value(scalar) != "", f"Json path {path} is empty")
                equal = scalar_matches(scalar, expected)
            case _:
                raise TypeError(f"Unsupported json path value {value!r}")

        actual = format_value(raw_value(value))
        if is_not:
            verify(
                not equal, f"Json path {path} should not be {expected}, got {actual}"
            )
        else:
            verify(equal, f"Json path {path} should be {expected}, got {actual}")

    def check_json_path_is_array(self, path: str, length: int = NO_SIZE_CHECK) -> None:
        """Check the value at a JSON path is an array, of exact length unless -1."""
        value = self._required_json_path(path)
        verify(
            isinstance(value, JsonSequence),
            f"Json path {path} should be an array, got {format_value(raw_value(value))}",
        )
        if length != NO_SIZE_CHECK:
            verify(
                len(value) == length,
                f"Json path {path} should have {length} element(s), got {len(value)}",
            )

    # scenario scope

    def store_header(self, name: str, alias: str) -> None:
        """Store all values of a response header under alias."""
        require_not_empty(name, "header name")
        require_not_empty(alias, "header alias")
        values = self.check_header_exists(name, False)
        verify(bool(values), f"Header {name} has no value")
        self._scope.put(ScopeKind.HEADER, alias, list(values))
        logger.debug("Header %s stored as %s", name, alias)

    def store_json_path(self, path: str, alias: str) -> None:
        """Store the value found at a JSON path under alias."""
        require_not_empty(path, "json path")
        require_not_empty(alias, "json path alias")
        value = self._required_json_path(path)
        self._scope.put(ScopeKind.JSON_PATH, alias, raw_value(value))
        logger.debug("Json path %s stored as %s", path, alias)

    def check_scenario_variable(self, alias: str, expected: str) -> None:
        """Check a stored value equals expected, or contains it for arrays.

        JSON path values are looked up first, stored headers second.
        """
        require_not_empty(alias, "scenario variable")
        require_not_none(expected, "expected value")

        value = self._scope.get(ScopeKind.JSON_PATH, alias)
        if value is None:
            value = self._scope.get(ScopeKind.HEADER, alias)
        verify(value is not None, f"Scenario variable {alias} is not defined")

        if isinstance(value, list):
            members = [format_value(item) for item in value]
            verify(
                expected in members,
                f"Scenario variable {alias} should contain {expected}, got {members}",
            )
        else:
            actual = format_value(value)
            verify(
                actual == expected,
                f"Scenario variable {alias} should be {expected}, got {actual}",
            )
