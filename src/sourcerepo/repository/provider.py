"""
Source Provider Protocol (Abstract Interface)
Capabilities a backing source may offer to a Repository
"""
from __future__ import annotations

from typing import Any, Awaitable, Protocol, Union

RawResult = Union[Any, Awaitable[Any]]

# Canonical capability names, in binding order
OPERATIONS: tuple[str, ...] = ("get", "get_all", "query", "add", "remove", "fetch", "update")

# Attribute spellings probed on a provider for each capability
CAPABILITY_NAMES: dict[str, tuple[str, ...]] = {
    "get": ("get",),
    "get_all": ("get_all", "getAll"),
    "query": ("query",),
    "add": ("add",),
    "remove": ("remove",),
    "fetch": ("fetch",),
    "update": ("update",),
}


class SourceProvider(Protocol):
    """
    A backing data source (database adapter, API client, in-memory store).

    Every capability is optional; a provider implements any subset. Each may
    return its raw payload directly or an awaitable resolving to it. Raw
    payloads are a mapping, a sequence of mappings, or None.
    """

    def get(self, id: Any) -> RawResult:
        """Return the raw record for an id."""
        ...

    def get_all(self) -> RawResult:
        """Return every raw record."""
        ...

    def query(self, *args: Any, **kwargs: Any) -> RawResult:
        """Return the raw records matching provider-defined criteria."""
        ...

    def add(self, slug: dict[str, Any]) -> RawResult:
        """Persist a new record; may return the stored record or None."""
        ...

    def remove(self, item: Any) -> RawResult:
        """Remove the record for an untransformed item; result is discarded."""
        ...

    def fetch(self, slug: dict[str, Any]) -> RawResult:
        """Populate a record from its identity; may return None."""
        ...

    def update(self, slug: dict[str, Any]) -> RawResult:
        """Persist a record's state; may return the stored record or None."""
        ...


__all__ = ["SourceProvider", "OPERATIONS", "CAPABILITY_NAMES", "RawResult"]
