"""Behave steps driving a REST API.

Import this module from a file in the project's ``features/steps``
directory to register the steps::

    from bdd_steps.rest_api import *  # noqa: F401,F403

Each step delegates to the RequestContext created for the scenario by
``bdd_steps.hooks.before_scenario``.
"""

from behave import given, when, then, step  # pyright: ignore[reportAttributeAccessIssue]
from behave.runner import Context

from constants import NO_SIZE_CHECK
from models.http import HttpMethod
from request_context import RequestContext
from utils.checks import StepPreconditionError


def get_request_context(context: Context) -> RequestContext:
    """Return the request context of the running scenario."""
    request_context = getattr(context, "request_context", None)
    if request_context is None:
        raise StepPreconditionError(
            "No request context for this scenario, "
            "call bdd_steps.hooks.before_scenario from environment.py"
        )
    return request_context


def table_to_dict(context: Context) -> dict[str, str]:
    """Read a two column step table (name, value) into a dictionary."""
    if context.table is None:
        raise StepPreconditionError("Step requires a table with names and values")
    return {row.cells[0]: row.cells[1] for row in context.table}


# request building


@given("baseUri is {base_uri}")
def set_base_uri(context: Context, base_uri: str) -> None:
    """Set the base URI prepended to requested resources."""
    get_request_context(context).set_base_uri(base_uri)


@given("I set body to {body}")
def set_body(context: Context, body: str) -> None:
    """Set the JSON request body given inline."""
    get_request_context(context).set_body(body)


@given("I set body to")
def set_body_from_text(context: Context) -> None:
    """Set the JSON request body given as a doc string."""
    get_request_context(context).set_body(context.text)


@given("I set headers to")
def set_headers(context: Context) -> None:
    """Add request headers listed in the step table."""
    get_request_context(context).add_headers(table_to_dict(context))


@given("I set query parameters to")
def set_query_parameters(context: Context) -> None:
    """Add query parameters listed in the step table."""
    get_request_context(context).add_query_parameters(table_to_dict(context))


@given("I set {name} header to {value}")
def set_header(context: Context, name: str, value: str) -> None:
    """Set one request header, `$alias` refers to a stored header."""
    get_request_context(context).set_header(name, value)


# requests


def _perform(method: HttpMethod):  # type: ignore[no-untyped-def]
    def perform_request(context: Context, resource: str) -> None:
        get_request_context(context).request(resource, method)

    perform_request.__doc__ = f"Send a {method} request to the resource."
    perform_request.__name__ = f"perform_{method.lower()}_request"
    return perform_request


for _method in HttpMethod:
    when(f"I {_method} {{resource}}")(_perform(_method))


# response checks


@then("response code should be {status:d}")
def check_status(context: Context, status: int) -> None:
    """Check the response status code."""
    get_request_context(context).check_status(status, False)


@then("response code should not be {status:d}")
def check_status_not(context: Context, status: int) -> None:
    """Check the response status code differs."""
    get_request_context(context).check_status(status, True)


@then("response header {name} should exist")
def check_header_exists(context: Context, name: str) -> None:
    """Check a response header is present."""
    get_request_context(context).check_header_exists(name, False)


@then("response header {name} should not exist")
def check_header_not_exists(context: Context, name: str) -> None:
    """Check a response header is absent."""
    get_request_context(context).check_header_exists(name, True)


@then("response header {name} should be {value}")
def check_header_equal(context: Context, name: str, value: str) -> None:
    """Check the first value of a response header contains value."""
    get_request_context(context).check_header_equal(name, value, False)


@then("response header {name} should not be {value}")
def check_header_not_equal(context: Context, name: str, value: str) -> None:
    """Check the first value of a response header does not contain value."""
    get_request_context(context).check_header_equal(name, value, True)


@then("response body should be valid json")
def check_json_body(context: Context) -> None:
    """Check the response body is valid JSON."""
    get_request_context(context).check_json_body()


@then("response body should contain {text}")
def check_body_contains(context: Context, text: str) -> None:
    """Check the raw response body contains text."""
    get_request_context(context).check_body_contains(text)


@then("response body path {path} should exist")
def check_json_path_exists(context: Context, path: str) -> None:
    """Check a JSON path selects a value."""
    get_request_context(context).check_json_path_exists(path)


@then("response body path {path} should not exist")
def check_json_path_doesnt_exist(context: Context, path: str) -> None:
    """Check a JSON path selects nothing (see strict_json_path_absence)."""
    get_request_context(context).check_json_path_doesnt_exist(path)


@then("response body path {path} should be {value}")
def check_json_path(context: Context, path: str, value: str) -> None:
    """Check the value selected by a JSON path."""
    get_request_context(context).check_json_path(path, value, False)


@then("response body path {path} should not be {value}")
def check_json_path_not(context: Context, path: str, value: str) -> None:
    """Check the value selected by a JSON path differs."""
    get_request_context(context).check_json_path(path, value, True)


@then("response body is typed as array for path {path}")
def check_json_path_is_array(context: Context, path: str) -> None:
    """Check a JSON path selects an array."""
    get_request_context(context).check_json_path_is_array(path, NO_SIZE_CHECK)


@then("response body is typed as array using path {path} with length {length:d}")
def check_json_path_is_array_with_length(
    context: Context, path: str, length: int
) -> None:
    """Check a JSON path selects an array of the given length."""
    get_request_context(context).check_json_path_is_array(path, length)


# scenario scope


@step("I store the value of response header {name} as {alias} in scenario scope")
def store_header(context: Context, name: str, alias: str) -> None:
    """Store all values of a response header under alias."""
    get_request_context(context).store_header(name, alias)


@step("I store the value of body path {path} as {alias} in scenario scope")
def store_json_path(context: Context, path: str, alias: str) -> None:
    """Store the value selected by a JSON path under alias."""
    get_request_context(context).store_json_path(path, alias)


@step("value of scenario variable {alias} should be {value}")
def check_scenario_variable(context: Context, alias: str, value: str) -> None:
    """Check a stored scenario variable."""
    get_request_context(context).check_scenario_variable(alias, value)
