"""Common types for the project."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class Singleton(type):
    """Metaclass for Singleton support."""

    _instances = {}  # type: ignore

    def __call__(cls, *args, **kwargs):  # type: ignore
        """
        Return the single cached instance of the class, creating and caching it on first call.

        Returns:
            object: The singleton instance for this class.
        """
        if cls not in cls._instances:
            cls._instances[cls] = super(Singleton, cls).__call__(*args, **kwargs)
        return cls._instances[cls]


class JsonScalar(BaseModel):
    """JSON path result that is not an array.

    Strings, numbers, booleans, null and whole objects all land here; they
    are compared as a single JSON value.
    """

    model_config = ConfigDict(frozen=True)

    value: Any


class JsonSequence(BaseModel):
    """JSON path result that is an ordered collection."""

    model_config = ConfigDict(frozen=True)

    items: list[Any]

    def __len__(self) -> int:
        """Return number of items in the collection."""
        return len(self.items)


type JsonPathValue = JsonScalar | JsonSequence


def to_json_path_value(raw: Any) -> JsonPathValue:
    """Tag a raw JSON path result as a scalar or a sequence."""
    if isinstance(raw, list):
        return JsonSequence(items=raw)
    return JsonScalar(value=raw)


def raw_value(value: JsonPathValue) -> Any:
    """Return the plain Python value carried by a tagged JSON path result."""
    match value:
        case JsonSequence(items=items):
            return items
        case JsonScalar(value=scalar):
            return scalar
    raise TypeError(f"Unsupported JSON path value {value!r}")
