"""Behave environment hooks wiring the step library into a test run.

Call these from the project's ``features/environment.py``::

    from bdd_steps import hooks

    def before_all(context):
        hooks.before_all(context)

    def before_scenario(context, scenario):
        hooks.before_scenario(context, scenario)

    def after_all(context):
        hooks.after_all(context)
"""

import os
from typing import Any, Optional

from behave.model import Scenario
from behave.runner import Context

import constants
from client import RequestsTransport, Transport
from configuration import configuration
from log import get_logger
from request_context import RequestContext
from scenario_scope import ScenarioScope
from utils.checks import StepPreconditionError

logger = get_logger(__name__)


def _userdata(context: Context, key: str) -> Optional[str]:
    """Return a ``-D key=value`` option given on the behave command line."""
    userdata: Any = getattr(context.config, "userdata", None) or {}
    value = userdata.get(key)
    return value or None


def load_configuration(context: Context) -> None:
    """Load the step library configuration for this test run.

    The file is taken from the ``config`` userdata option or the
    REST_API_STEPS_CONFIG environment variable; without either, defaults are
    used. The base URI can be overridden by the ``base_uri`` userdata option
    or REST_API_STEPS_BASE_URI.
    """
    config_file = _userdata(context, constants.USERDATA_CONFIG_KEY) or os.getenv(
        constants.REST_API_STEPS_CONFIG_ENV_VAR
    )
    if config_file:
        configuration.load_configuration(config_file)
    else:
        logger.info("No configuration file given, using defaults")
        configuration.init_from_dict({})

    base_uri = _userdata(context, constants.USERDATA_BASE_URI_KEY) or os.getenv(
        constants.REST_API_STEPS_BASE_URI_ENV_VAR
    )
    if base_uri:
        configuration.scenario_configuration.base_uri = base_uri


def before_all(context: Context, transport: Optional[Transport] = None) -> None:
    """Load configuration and create the transport shared by all scenarios.

    Parameters:
        context: Behave context.
        transport: Transport to use instead of a RequestsTransport.
    """
    load_configuration(context)
    if transport is None:
        transport = RequestsTransport(configuration.transport_configuration)
    context.rest_api_transport = transport
    logger.info(
        "REST API steps ready, base uri '%s'",
        configuration.scenario_configuration.base_uri,
    )


def before_scenario(context: Context, scenario: Optional[Scenario] = None) -> None:
    """Give the scenario its own scope and request context."""
    transport = getattr(context, "rest_api_transport", None)
    if transport is None:
        raise StepPreconditionError(
            "REST API transport is not set up, call hooks.before_all first"
        )
    context.scenario_scope = ScenarioScope()
    context.request_context = RequestContext(
        transport,
        context.scenario_scope,
        configuration.scenario_configuration.model_copy(deep=True),
    )
    if scenario is not None:
        logger.debug("Fresh request context for scenario '%s'", scenario.name)


def after_scenario(context: Context, scenario: Optional[Scenario] = None) -> None:
    """Drop the scenario scope so nothing leaks into the next scenario."""
    scope = getattr(context, "scenario_scope", None)
    if scope is not None:
        scope.reset()


def after_all(context: Context) -> None:
    """Close the transport created by before_all."""
    transport = getattr(context, "rest_api_transport", None)
    close = getattr(transport, "close", None)
    if close is not None:
        close()
