"""Immutable route table keyed by literal (method, path) pairs.

The table is assembled once at startup and never mutated afterwards, so
concurrent lookups need no coordination. Matching is an exact dictionary
lookup: no prefix matching, no trailing-slash folding, no path parameters.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from ..logging_conf import get_logger
from .methods import HttpMethod

__all__ = [
    "Handler",
    "NoRouteMatch",
    "RouteEntry",
    "RouteTable",
]

logger = get_logger("routing.table")

Handler = Callable[..., Any]
RouteKey = tuple[HttpMethod, str]


# ------------------------
# Errors
# ------------------------
class NoRouteMatch(LookupError):
    """No registered entry matches the request's method and path.

    The `code` attribute is the stable machine code the host reports back
    to clients.
    """

    code: str = "route_not_found"

    def __init__(self, method: str, path: str) -> None:
        self.method = method
        self.path = path
        super().__init__(f"No route for {method} {path}")


# ------------------------
# Schema
# ------------------------
@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A single (method, path, handler) binding."""

    method: HttpMethod
    path: str
    handler: Handler
    summary: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", HttpMethod.parse(self.method))
        if not isinstance(self.path, str) or not self.path.startswith("/"):
            raise ValueError(f"route path must start with '/': {self.path!r}")
        if not callable(self.handler):
            raise TypeError(f"handler for {self.method.value} {self.path} is not callable")

    @property
    def key(self) -> RouteKey:
        return (self.method, self.path)

    @property
    def name(self) -> str:
        """Qualified name of the handler, e.g. `AppController.get_status`."""
        return getattr(self.handler, "__qualname__", None) or repr(self.handler)


# ------------------------
# Table
# ------------------------
class RouteTable:
    """Ordered, read-only collection of route entries.

    Usage::

        table = RouteTable.from_entries([RouteEntry(HttpMethod.GET, "/status", handler)])
        table.match("GET", "/status")  # -> handler
        table.match("GET", "/nope")    # raises NoRouteMatch
    """

    __slots__ = ("_index",)

    _index: MappingProxyType[RouteKey, RouteEntry]

    def __init__(self, index: dict[RouteKey, RouteEntry]) -> None:
        object.__setattr__(self, "_index", MappingProxyType(dict(index)))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("RouteTable is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("RouteTable is immutable")

    @classmethod
    def from_entries(cls, entries: Iterable[RouteEntry]) -> RouteTable:
        """Build a table; a later entry for the same (method, path) wins.

        The surviving entry keeps the position of the first registration.
        """
        index: dict[RouteKey, RouteEntry] = {}
        for entry in entries:
            previous = index.get(entry.key)
            if previous is not None:
                logger.warning(
                    "route.override",
                    extra={
                        "event": "route_override",
                        "method": entry.method.value,
                        "path": entry.path,
                        "previous": previous.name,
                        "handler": entry.name,
                    },
                )
            index[entry.key] = entry
        return cls(index)

    @property
    def entries(self) -> tuple[RouteEntry, ...]:
        return tuple(self._index.values())

    def match(self, method: str | HttpMethod, path: str) -> Handler:
        """Return the handler registered for exactly `method` and `path`.

        Method comparison ignores case; path comparison is literal.

        Raises:
            NoRouteMatch: if the pair is not registered or the method is unknown.
        """
        try:
            verb = HttpMethod.parse(method)
        except ValueError:
            raise NoRouteMatch(str(method), path) from None

        entry = self._index.get((verb, path))
        if entry is None:
            raise NoRouteMatch(verb.value, path)
        return entry.handler

    def allowed_methods(self, path: str) -> frozenset[HttpMethod]:
        """Methods registered for the literal `path` (empty if none)."""
        return frozenset(method for method, p in self._index if p == path)

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(self._index.values())

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        method, path = item
        try:
            verb = HttpMethod.parse(method)
        except ValueError:
            return False
        return (verb, path) in self._index

    def __repr__(self) -> str:
        routes = ", ".join(f"{e.method.value} {e.path}" for e in self)
        return f"RouteTable([{routes}])"
