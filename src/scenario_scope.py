"""Values shared between the steps of one scenario."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional

from constants import ScopeKind
from log import get_logger
from utils.checks import require_not_empty, require_not_none

logger = get_logger(__name__)


class ScenarioScope:
    """Named results extracted by earlier steps of a scenario.

    Response headers are stored as lists of strings, JSON path results as
    whatever the path evaluated to. Aliases of both kinds live in separate
    namespaces. A stored alias is never removed during the scenario, storing
    it again replaces the value.

    One instance belongs to one scenario; the behave hooks create a new one
    in ``before_scenario``.
    """

    def __init__(self) -> None:
        """Initialize empty header and JSON path stores."""
        self._values: dict[ScopeKind, dict[str, Any]] = {
            kind: {} for kind in ScopeKind
        }

    def put(self, kind: ScopeKind, alias: str, value: Any) -> None:
        """Store value under alias for the given kind."""
        require_not_none(kind, "scope kind")
        require_not_empty(alias, "scope alias")
        logger.debug("Storing %s scenario variable '%s'", kind, alias)
        self._values[ScopeKind(kind)][alias] = value

    def get(self, kind: ScopeKind, alias: str) -> Optional[Any]:
        """Return the value stored under alias, None when it is not stored."""
        return self._values[ScopeKind(kind)].get(alias)

    def contains(self, kind: ScopeKind, alias: str) -> bool:
        """Tell whether alias is stored for the given kind."""
        return alias in self._values[ScopeKind(kind)]

    def snapshot(self, kind: ScopeKind) -> Mapping[str, Any]:
        """Return a read-only copy of all values of one kind."""
        return MappingProxyType(dict(self._values[ScopeKind(kind)]))

    @property
    def headers(self) -> Mapping[str, list[str]]:
        """Read-only view of stored header values."""
        return MappingProxyType(self._values[ScopeKind.HEADER])

    @property
    def json_paths(self) -> Mapping[str, Any]:
        """Read-only view of stored JSON path values."""
        return MappingProxyType(self._values[ScopeKind.JSON_PATH])

    def reset(self) -> None:
        """Forget everything stored so far."""
        for values in self._values.values():
            values.clear()
