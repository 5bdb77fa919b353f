"""Dynamic parameter substitution.

Step arguments may refer to values stored earlier in the scenario with
`` `$alias` ``. References are resolved one at a time, leftmost first, and
the string is scanned again after every replacement, so a stored value may
itself contain further references.
"""

import re
from collections.abc import Callable, Mapping
from typing import Any

from constants import DEFAULT_MAX_SUBSTITUTIONS, DYNAMIC_PARAMETER_PATTERN
from log import get_logger
from utils.checks import SubstitutionLimitError, UndefinedAliasError
from utils.json_values import format_value

logger = get_logger(__name__)

DYNAMIC_PARAMETER_REGEX = re.compile(DYNAMIC_PARAMETER_PATTERN)


def find_reference(value: str) -> str | None:
    """Return the alias of the leftmost dynamic parameter, None when there is none."""
    match = DYNAMIC_PARAMETER_REGEX.search(value)
    if match is None:
        return None
    return match.group(1)


def resolve_dynamic_parameters(
    value: str,
    variables: Mapping[str, Any],
    max_iterations: int = DEFAULT_MAX_SUBSTITUTIONS,
    formatter: Callable[[Any], str] = format_value,
) -> str:
    """Replace all `` `$alias` `` references in value.

    Parameters:
        value: Text taken from a step.
        variables: Read-only snapshot of one scenario scope kind.
        max_iterations: Upper bound on the number of replacements.
        formatter: Turns a stored value into its textual form.

    Returns:
        The text with every reference replaced.

    Raises:
        UndefinedAliasError: A referenced alias is not stored.
        SubstitutionLimitError: More than max_iterations replacements were
            needed, which means the aliases refer to each other.
    """
    resolved = value
    for _ in range(max_iterations):
        alias = find_reference(resolved)
        if alias is None:
            return resolved
        if alias not in variables:
            raise UndefinedAliasError(
                f"Scenario variable '{alias}' referenced in '{value}' is not defined"
            )
        logger.debug("Substituting scenario variable '%s'", alias)
        resolved = resolved.replace(f"`${alias}`", formatter(variables[alias]))

    if find_reference(resolved) is None:
        return resolved
    raise SubstitutionLimitError(
        f"Dynamic parameters in '{value}' not resolved after {max_iterations} substitutions"
    )
