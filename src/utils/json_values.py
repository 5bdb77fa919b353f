"""Helpers to compare and print JSON values the way scenarios write them."""

import json
from typing import Any

from constants import HEADER_VALUE_SEPARATOR


def json_equal(left: Any, right: Any) -> bool:
    """Compare two parsed JSON values using JSON semantics.

    Unlike plain ``==``, booleans never equal numbers (``True != 1``), while
    integers and floats with the same numeric value are equal (``42 == 42.0``).
    Arrays compare element-wise in order, objects key by key.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    if isinstance(left, list) and isinstance(right, list):
        return len(left) == len(right) and all(
            json_equal(a, b) for a, b in zip(left, right)
        )
    if isinstance(left, dict) and isinstance(right, dict):
        return left.keys() == right.keys() and all(
            json_equal(value, right[key]) for key, value in left.items()
        )
    if type(left) is not type(right):
        return False
    return left == right


def parse_expected_value(text: str) -> Any:
    """Parse expected value text taken from a step.

    Text that is valid JSON is parsed (``42`` becomes a number, ``true`` a
    boolean, ``"x"`` a string). Anything else is taken verbatim as a string,
    so ``John`` can be written without quotes.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def scalar_matches(actual: Any, expected_text: str) -> bool:
    """Check a single JSON value against expected value text."""
    if isinstance(actual, str) and actual == expected_text:
        return True
    return json_equal(actual, parse_expected_value(expected_text))


def format_value(value: Any) -> str:
    """Return the textual form of a JSON value used in substitutions and checks."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def format_header_values(values: Any) -> str:
    """Flatten a multi-valued header into one string, single values are kept as is."""
    if isinstance(values, (list, tuple)):
        return HEADER_VALUE_SEPARATOR.join(format_value(value) for value in values)
    return format_value(values)
