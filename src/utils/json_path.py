"""JSON path evaluation over response bodies.

Paths are parsed by jsonpath-ng (extended syntax, so filters such as
``$.items[?(@.price > 10)]`` work). A path made only of single field names and
single indexes is *definite*: it selects at most one node and evaluating it
returns that node's value, raising PathNotFoundError when nothing matches. Any
other path (wildcards, slices, filters, recursive descent, unions) is
*indefinite* and always returns the list of matched values, possibly empty.
"""

import json
from typing import Any

from jsonpath_ng.ext import parse
from jsonpath_ng.jsonpath import JSONPath, Child, Fields, Index, Root, This

from log import get_logger

logger = get_logger(__name__)


class PathNotFoundError(LookupError):
    """Definite JSON path does not select any node of the document."""

    def __init__(self, path: str) -> None:
        """Initialize the error for the given path expression."""
        super().__init__(f"No results for path: {path}")
        self.path = path


def compile_path(path: str) -> JSONPath:
    """Parse a JSON path expression, parser errors propagate unchanged."""
    return parse(path)


def is_definite(expression: JSONPath) -> bool:
    """Tell whether a parsed path selects at most one node."""
    match expression:
        case Root() | This():
            return True
        case Fields():
            return len(expression.fields) == 1 and expression.fields[0] != "*"
        case Index():
            indices = getattr(expression, "indices", None)
            if indices is None:
                indices = (expression.index,)
            return len(indices) == 1
        case Child():
            return is_definite(expression.left) and is_definite(expression.right)
    return False


def read(document: Any, path: str) -> Any:
    """Evaluate a JSON path against an already parsed document.

    Parameters:
        document: Parsed JSON document.
        path: JSON path expression.

    Returns:
        The single selected value for a definite path, the list of selected
        values otherwise.

    Raises:
        PathNotFoundError: If a definite path selects nothing.
    """
    expression = compile_path(path)
    matches = expression.find(document)
    if is_definite(expression):
        if not matches:
            raise PathNotFoundError(path)
        return matches[0].value
    logger.debug("Path %s is indefinite, %d match(es)", path, len(matches))
    return [match.value for match in matches]


def evaluate(document_text: str, path: str) -> Any:
    """Parse a JSON document and evaluate a JSON path against it."""
    return read(json.loads(document_text), path)
