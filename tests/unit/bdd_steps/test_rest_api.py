"""Unit tests for the behave steps defined in bdd_steps/rest_api.py."""

from types import SimpleNamespace
from typing import Any, Optional

import pytest
from behave.model import Table
from behave.step_registry import registry

from bdd_steps import rest_api
from constants import ScopeKind
from models.http import HttpMethod
from request_context import RequestContext
from scenario_scope import ScenarioScope
from tests.conftest import FakeTransport, json_response
from utils.checks import StepPreconditionError

BODY = '{"id": 42, "tags": ["a", "b"], "owner": {"id": 7}}'


def make_context(
    request_context: Optional[RequestContext],
    table: Optional[Table] = None,
    text: Optional[str] = None,
) -> Any:
    """Build a stand-in for the behave context passed to step functions."""
    return SimpleNamespace(request_context=request_context, table=table, text=text)


def make_table(*rows: list[str]) -> Table:
    """Build a two column step table with a heading row."""
    return Table(["name", "value"], rows=list(rows))


@pytest.fixture(name="context")
def context_fixture(request_context: RequestContext) -> Any:
    """Behave context holding the scenario's request context."""
    return make_context(request_context)


def test_missing_request_context() -> None:
    """Test that steps fail when the hooks were not installed."""
    with pytest.raises(StepPreconditionError, match="No request context"):
        rest_api.set_base_uri(make_context(None), "http://localhost")


def test_table_required(context: Any) -> None:
    """Test that table steps fail without a table."""
    with pytest.raises(StepPreconditionError, match="requires a table"):
        rest_api.set_headers(context)


def test_request_steps(transport: FakeTransport, context: Any) -> None:
    """Test the Given steps followed by a When step."""
    rest_api.set_base_uri(context, "http://localhost:8080")
    rest_api.set_header(context, "Authorization", "Bearer xyz")
    context.table = make_table(["Accept", "application/json"], ["X-Trace", "t1"])
    rest_api.set_headers(context)
    context.table = make_table(["page", "2"])
    rest_api.set_query_parameters(context)
    rest_api.set_body(context, '{"name": "Ada"}')

    rest_api._perform(HttpMethod.POST)(context, "/users")  # pylint: disable=protected-access

    assert transport.last_request == {
        "method": HttpMethod.POST,
        "uri": "http://localhost:8080/users?page=2",
        "headers": {
            "Authorization": ["Bearer xyz"],
            "Accept": ["application/json"],
            "X-Trace": ["t1"],
        },
        "body": {"name": "Ada"},
    }


def test_set_body_from_doc_string(request_context: RequestContext) -> None:
    """Test the doc string variant of the body step."""
    context = make_context(request_context, text='{\n  "name": "Ada"\n}')
    rest_api.set_body_from_text(context)
    assert request_context.body == {"name": "Ada"}


def test_when_step_registered_for_every_method() -> None:
    """Test that a When step exists for each HTTP method."""
    patterns = {matcher.pattern for matcher in registry.steps["when"]}
    for method in HttpMethod:
        assert f"I {method} {{resource}}" in patterns


def test_response_steps(transport: FakeTransport, context: Any) -> None:
    """Test the Then steps against a canned response."""
    transport.response = json_response(BODY, headers={"X-Request-Id": ["abc-123"]})
    rest_api._perform(HttpMethod.GET)(context, "/users/42")  # pylint: disable=protected-access

    rest_api.check_status(context, 200)
    rest_api.check_status_not(context, 404)
    rest_api.check_header_exists(context, "X-Request-Id")
    rest_api.check_header_not_exists(context, "X-Missing")
    rest_api.check_header_equal(context, "Content-Type", "json")
    rest_api.check_header_not_equal(context, "Content-Type", "xml")
    rest_api.check_json_body(context)
    rest_api.check_body_contains(context, '"id": 42')
    rest_api.check_json_path_exists(context, "$.owner.id")
    rest_api.check_json_path_doesnt_exist(context, "$.missing")
    rest_api.check_json_path(context, "$.id", "42")
    rest_api.check_json_path_not(context, "$.id", "43")
    rest_api.check_json_path_is_array(context, "$.tags")
    rest_api.check_json_path_is_array_with_length(context, "$.tags", 2)

    with pytest.raises(AssertionError):
        rest_api.check_status(context, 201)
    with pytest.raises(AssertionError):
        rest_api.check_json_path_is_array_with_length(context, "$.tags", 3)


def test_scenario_scope_steps(
    transport: FakeTransport, scope: ScenarioScope, context: Any
) -> None:
    """Test storing values and using them in the next request."""
    transport.response = json_response(BODY, headers={"X-Request-Id": ["abc-123"]})
    rest_api._perform(HttpMethod.GET)(context, "/users/42")  # pylint: disable=protected-access

    rest_api.store_header(context, "X-Request-Id", "reqId")
    rest_api.store_json_path(context, "$.owner.id", "ownerId")
    rest_api.check_scenario_variable(context, "reqId", "abc-123")
    rest_api.check_scenario_variable(context, "ownerId", "7")

    rest_api.set_header(context, "X-Correlation", "`$reqId`")
    rest_api._perform(HttpMethod.DELETE)(context, "/owners/`$ownerId`")  # pylint: disable=protected-access

    assert scope.get(ScopeKind.HEADER, "reqId") == ["abc-123"]
    assert transport.last_request["uri"] == "/owners/7"
    assert transport.last_request["headers"]["X-Correlation"] == ["abc-123"]
