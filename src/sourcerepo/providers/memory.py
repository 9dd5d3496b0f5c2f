"""
In-memory source provider.

Dict-backed store implementing every repository capability; useful for
tests, prototyping and as a reference for real adapters. Records are
copied on the way in and out so callers never share state with the store.
No method awaits between reading and writing the store, so each call is
atomic on the event loop.
"""
from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Callable, Iterable, Optional
from uuid import uuid4

from sourcerepo.observability.logger import get_logger

logger = get_logger(__name__)

Record = dict[str, Any]


class InMemorySource:
    def __init__(self, records: Iterable[Mapping[str, Any]] = (), *, id_field: str = "id") -> None:
        self.id_field = id_field
        self._records: dict[Any, Record] = {}
        for record in records:
            stored = dict(record)
            self._records[stored[id_field]] = stored

    def __len__(self) -> int:
        return len(self._records)

    def _identity(self, item: Any) -> Any:
        if isinstance(item, Mapping):
            return item.get(self.id_field)
        if hasattr(item, self.id_field):
            return getattr(item, self.id_field)
        return item

    async def get(self, id: Any) -> Optional[Record]:
        record = self._records.get(id)
        return copy.deepcopy(record) if record is not None else None

    async def get_all(self) -> list[Record]:
        return [copy.deepcopy(r) for r in self._records.values()]

    async def query(self, predicate: Optional[Callable[[Record], bool]] = None, **equals: Any) -> list[Record]:
        """Records matching predicate (if given) and every field=value pair."""
        matches = []
        for record in self._records.values():
            if predicate is not None and not predicate(record):
                continue
            if any(record.get(k) != v for k, v in equals.items()):
                continue
            matches.append(copy.deepcopy(record))
        return matches

    async def add(self, slug: Mapping[str, Any]) -> Record:
        record = copy.deepcopy(dict(slug))
        if record.get(self.id_field) is None:
            record[self.id_field] = str(uuid4())
        key = record[self.id_field]
        if key in self._records:
            raise ValueError(f"Record with {self.id_field}={key!r} already exists")
        self._records[key] = record
        logger.debug("Record added", id=key)
        return copy.deepcopy(record)

    async def update(self, slug: Mapping[str, Any]) -> Record:
        key = slug.get(self.id_field)
        if key not in self._records:
            raise KeyError(key)
        self._records[key].update(copy.deepcopy(dict(slug)))
        logger.debug("Record updated", id=key)
        return copy.deepcopy(self._records[key])

    async def fetch(self, slug: Mapping[str, Any]) -> Optional[Record]:
        return await self.get(slug.get(self.id_field))

    async def remove(self, item: Any) -> bool:
        key = self._identity(item)
        removed = self._records.pop(key, None) is not None
        logger.debug("Record removed", id=key, removed=removed)
        return removed


__all__ = ["InMemorySource"]
