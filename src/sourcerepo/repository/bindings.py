"""
Provider binding table: at most one provider function per operation.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Callable, Optional

from sourcerepo.exceptions import DuplicateBindingError, UnboundOperationError, UnknownOperationError
from sourcerepo.repository.provider import OPERATIONS

ProviderFunction = Callable[..., Any]


@dataclass
class ProviderBindings:
    get: Optional[ProviderFunction] = None
    get_all: Optional[ProviderFunction] = None
    query: Optional[ProviderFunction] = None
    add: Optional[ProviderFunction] = None
    remove: Optional[ProviderFunction] = None
    fetch: Optional[ProviderFunction] = None
    update: Optional[ProviderFunction] = None

    @staticmethod
    def _check_name(name: str) -> None:
        if name not in OPERATIONS:
            raise UnknownOperationError(
                f"Unknown repository operation '{name}'",
                details={"operation": name, "known": list(OPERATIONS)},
            )

    def is_bound(self, name: str) -> bool:
        self._check_name(name)
        return getattr(self, name) is not None

    def bind(self, name: str, func: ProviderFunction) -> None:
        """Fill a slot once; a second bind of the same name is a programming error."""
        self._check_name(name)
        if getattr(self, name) is not None:
            raise DuplicateBindingError(
                f"Attempted to source duplicate method '{name}'",
                details={"operation": name},
            )
        setattr(self, name, func)

    def lookup(self, name: str) -> ProviderFunction:
        self._check_name(name)
        func = getattr(self, name)
        if func is None:
            raise UnboundOperationError(
                f"No source provider for '{name}'",
                details={"operation": name},
            )
        return func

    @property
    def bound(self) -> tuple[str, ...]:
        return tuple(f.name for f in fields(self) if getattr(self, f.name) is not None)


__all__ = ["ProviderBindings", "ProviderFunction"]
