"""
Repository Facade over sourced providers
Guarantees an async API and consistent arity of return values
"""
from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Any, Generic, MutableMapping, Optional, Type, TypeVar

from sourcerepo.config import Settings, get_settings
from sourcerepo.exceptions import DuplicateBindingError, UnboundOperationError
from sourcerepo.mapping.mapper import Mapper
from sourcerepo.mapping.transform import DualModeFunction, Transform
from sourcerepo.observability.logger import get_logger, time_block
from sourcerepo.repository.bindings import ProviderBindings, ProviderFunction
from sourcerepo.repository.provider import CAPABILITY_NAMES, OPERATIONS

logger = get_logger(__name__)

T = TypeVar("T")


def _capability(provider: Any, attr: str) -> Optional[ProviderFunction]:
    if isinstance(provider, Mapping):
        candidate = provider.get(attr)
    else:
        candidate = getattr(provider, attr, None)
    return candidate if callable(candidate) else None


class Repository(Generic[T]):
    """
    Binds named CRUD-ish operations to one or more sourced providers.

    Every operation is a coroutine. Single-item operations resolve to one
    instance of the entity type, collection operations to a list, whatever
    shape the provider actually returned.

    Usage:
        users = Repository(User).use(RenameField("n", "name")).source(UserApi())
        user = await users.get("1")
    """

    def __init__(self, entity_type: Type[T], *, settings: Optional[Settings] = None) -> None:
        self.entity_type = entity_type
        self._mapper: Mapper[T] = Mapper(entity_type)
        self._bindings = ProviderBindings()
        self._settings = settings

    # ------------------------------------------------------------------ setup

    @property
    def mapper(self) -> Mapper[T]:
        return self._mapper

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    @property
    def bound_operations(self) -> tuple[str, ...]:
        return self._bindings.bound

    def is_bound(self, name: str) -> bool:
        return self._bindings.is_bound(name)

    def use(self, transform: Transform | DualModeFunction) -> "Repository[T]":
        """Delegate a transform to the internal mapper."""
        self._mapper.use(transform)
        return self

    def source(self, provider: Any) -> "Repository[T]":
        """
        Provide this repository with a backing source for one or more operations.

        Args:
            provider: Object exposing capabilities as callables, or a mapping
                of capability name to callable

        Returns:
            self, for chaining

        Raises:
            DuplicateBindingError: If any capability of provider is already
                bound. Nothing is bound in that case.
        """
        found: list[tuple[str, ProviderFunction]] = []
        for name in OPERATIONS:
            for attr in CAPABILITY_NAMES[name]:
                func = _capability(provider, attr)
                if func is None:
                    continue
                if self._bindings.is_bound(name) or any(n == name for n, _ in found):
                    logger.error(
                        "Attempted to source duplicate method",
                        entity=self.entity_type.__name__,
                        operation=name,
                        provider=type(provider).__name__,
                    )
                    raise DuplicateBindingError(
                        f"Attempted to source duplicate method '{name}' "
                        f"for {self.entity_type.__name__}",
                        details={"operation": name, "entity": self.entity_type.__name__},
                    )
                found.append((name, func))

        for name, func in found:
            self._bindings.bind(name, func)

        logger.info(
            "Sourced provider",
            entity=self.entity_type.__name__,
            provider=type(provider).__name__,
            operations=[name for name, _ in found],
        )
        return self

    # ------------------------------------------------------------- operations

    async def get(self, id: Any) -> T:
        """Find an item by its id."""
        func = self._require("get")
        output = await self._invoke("get", func, id)
        return self._mapper.to_single(output)

    async def get_all(self) -> list[T]:
        """Get all items."""
        func = self._require("get_all")
        output = await self._invoke("get_all", func)
        return self._mapper.to_many(output)

    async def query(self, *args: Any, **kwargs: Any) -> list[T]:
        """Query the underlying provider for a list of items; arguments are forwarded."""
        func = self._require("query")
        output = await self._invoke("query", func, *args, **kwargs)
        return self._mapper.to_many(output)

    async def add(self, item: Any) -> T:
        func = self._require("add")
        slug = self._mapper.transform_input(item)
        output = await self._invoke("add", func, slug)
        return self._handle_output(output, slug, item)

    async def update(self, item: Any) -> T:
        """Persist an item's state to the underlying provider."""
        func = self._require("update")
        slug = self._mapper.transform_input(item)
        output = await self._invoke("update", func, slug)
        return self._handle_output(output, slug, item)

    async def fetch(self, item: Any) -> T:
        """Find and populate an item based on its identity."""
        func = self._require("fetch")
        slug = self._mapper.transform_input(item)
        output = await self._invoke("fetch", func, slug)
        return self._handle_output(output, slug, item)

    async def remove(self, item: Any) -> None:
        """Remove a particular item. The item goes to the provider untransformed."""
        func = self._require("remove")
        await self._invoke("remove", func, item)

    # ---------------------------------------------------------------- helpers

    def _require(self, name: str) -> ProviderFunction:
        try:
            return self._bindings.lookup(name)
        except UnboundOperationError as e:
            logger.warning("No source provider for operation", entity=self.entity_type.__name__, operation=name)
            e.details = {**(e.details or {}), "entity": self.entity_type.__name__}
            raise

    async def _invoke(self, name: str, func: ProviderFunction, *args: Any, **kwargs: Any) -> Any:
        # settings resolve before the provider call, never after a committed write
        threshold = self.settings.slow_call_ms
        labels = {"entity": self.entity_type.__name__, "operation": name}
        with time_block(f"repository.{name}", logger=logger, labels=labels) as timer:
            result = func(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result

        if threshold and timer.elapsed_ms >= threshold:
            logger.warning("Slow provider call", duration_ms=round(timer.elapsed_ms, 3), threshold_ms=threshold, **labels)
        return result

    def _handle_output(self, output: Any, slug: MutableMapping[str, Any], item: Any) -> T:
        # a provider that returns nothing still yields what was sent
        if output is None:
            output = slug
        return self._mapper.to_single(output, item)

    def __repr__(self) -> str:
        return f"Repository({self.entity_type.__name__}, bound={list(self.bound_operations)})"


__all__ = ["Repository"]
