"""Implementation of common test steps."""

from behave import given  # pyright: ignore[reportAttributeAccessIssue]
from behave.runner import Context

from constants import ScopeKind


@given("The system is in default state")
def system_in_default_state(context: Context) -> None:
    """Check the default scenario state.

    Ensure the scenario starts without a response and with an empty scenario
    scope, as set up by the before_scenario hook in environment.py.

    Parameters:
        context (Context): Behave Context instance used to store and share test state.

    Raises:
        AssertionError: If a previous scenario leaked its state.
    """
    assert context is not None
    assert not context.request_context.has_response
    assert not context.scenario_scope.snapshot(ScopeKind.HEADER)
    assert not context.scenario_scope.snapshot(ScopeKind.JSON_PATH)
