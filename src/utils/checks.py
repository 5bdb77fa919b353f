"""Checks performed on step inputs and configuration options."""

import os
from typing import Any, Optional

from pydantic import FilePath


class InvalidConfigurationError(Exception):
    """Step library configuration is invalid."""


class StepPreconditionError(AssertionError):
    """Step input or scenario state does not allow the step to run."""


class MissingResponseError(StepPreconditionError):
    """A response is required but no request has been performed yet."""


class UndefinedAliasError(StepPreconditionError):
    """Dynamic parameter refers to an alias missing from the scenario scope."""


class SubstitutionLimitError(RuntimeError):
    """Dynamic parameter resolution did not converge."""


def require_not_none(value: Optional[Any], desc: str) -> Any:
    """Fail the step when a required argument is None."""
    if value is None:
        raise StepPreconditionError(f"{desc} must not be None")
    return value


def require_not_empty(value: Optional[Any], desc: str) -> Any:
    """Fail the step when a required string or mapping is None or empty.

    Parameters:
        value: String, mapping or any sized value supplied to a step.
        desc: Human readable name of the argument, used in the message.

    Returns:
        The value itself, so the check can be used inline.

    Raises:
        StepPreconditionError: If the value is None or empty.
    """
    require_not_none(value, desc)
    if len(value) == 0:
        raise StepPreconditionError(f"{desc} must not be empty")
    return value


def verify(condition: bool, message: str) -> None:
    """Fail the step with message when condition does not hold.

    Used instead of the assert statement so checks keep working when Python
    runs with optimizations enabled.
    """
    if not condition:
        raise AssertionError(message)


def file_check(path: FilePath, desc: str) -> None:
    """Check that path is a readable regular file."""
    if not os.path.isfile(path):
        raise InvalidConfigurationError(f"{desc} '{path}' is not a file")
    if not os.access(path, os.R_OK):
        raise InvalidConfigurationError(f"{desc} '{path}' is not readable")
