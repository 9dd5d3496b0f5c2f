"""
Bidirectional Mapper
Converts raw source payloads into typed instances and typed instances into slugs
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Generic, Iterator, MutableMapping, Optional, Type, TypeVar

from sourcerepo.mapping.transform import DualModeFunction, Transform, as_transform

T = TypeVar("T")

# Serialization hooks are presentation behavior, never data
RESERVED_FIELDS = frozenset({"to_json", "to_dict", "__json__"})

_STRINGS = (str, bytes, bytearray)


def is_array_like(thing: Any) -> bool:
    """True for any iterable collection; strings and mappings are single values."""
    return isinstance(thing, Iterable) and not isinstance(thing, (Mapping, *_STRINGS))


def _slot_names(obj: Any) -> Iterator[str]:
    for klass in type(obj).__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        yield from slots


def data_fields(obj: Any) -> Iterator[tuple[str, Any]]:
    """
    Enumerate the data fields of a mapping or plain object.

    Dunder names, callables and RESERVED_FIELDS are skipped.
    """
    if obj is None:
        return
    if isinstance(obj, Mapping):
        items: Iterator[tuple[Any, Any]] = iter(obj.items())
    elif hasattr(obj, "__dict__"):
        items = iter(list(vars(obj).items()))
    else:
        items = ((name, getattr(obj, name)) for name in _slot_names(obj) if hasattr(obj, name))

    for key, value in items:
        if key in RESERVED_FIELDS:
            continue
        if isinstance(key, str) and key.startswith("__") and key.endswith("__"):
            continue
        if callable(value):
            continue
        yield key, value


class Mapper(Generic[T]):
    """
    Transform the output from a source, and the input to a source, through an
    ordered stack of transforms.

    Attributes:
        entity_type: Class of the typed instances produced (constructible with no args)
    """

    def __init__(self, entity_type: Type[T]) -> None:
        self.entity_type = entity_type
        self._transforms: list[Transform] = []

    @property
    def transforms(self) -> tuple[Transform, ...]:
        return tuple(self._transforms)

    def use(self, transform: Transform | DualModeFunction) -> "Mapper[T]":
        """Append a transform to the pipeline. Transforms are trusted, not validated."""
        self._transforms.append(as_transform(transform))
        return self

    def transform_output(self, raw: Any, instance: Optional[Any] = None) -> T:
        """
        Run a raw payload through the transforms, then dump it into a typed instance.

        Args:
            raw: Raw payload (mapping, object with data fields, or None)
            instance: Suggested instance; reused only when its type is exactly entity_type

        Returns:
            The working instance (possibly replaced by a transform)
        """
        if instance is None or type(instance) is not self.entity_type:
            instance = self.entity_type()

        if raw is None:
            raw = {}
        elif not isinstance(raw, Mapping):
            # objects and scalars reach transforms as a mapping of their data fields
            raw = dict(data_fields(raw))

        for transform in self._transforms:
            replacement = transform.apply_output(raw, instance)
            # a transform may substitute the instance for all later steps
            if replacement is not None:
                instance = replacement

        # catch-all: whatever the transforms left behind passes straight through
        for key, value in list(raw.items()):
            setattr(instance, key, value)

        return instance

    def transform_input(
        self,
        instance: Any,
        slug: Optional[MutableMapping[str, Any]] = None,
    ) -> MutableMapping[str, Any]:
        """
        Prepare a slug to hand back to a source from a typed instance.

        Args:
            instance: Typed instance (or plain mapping) to serialize
            slug: Mapping to fill; a new dict when omitted

        Returns:
            The slug, after every transform ran on it in reverse order
        """
        if slug is None:
            slug = {}

        for key, value in data_fields(instance):
            slug[key] = value

        for transform in reversed(self._transforms):
            transform.apply_input(slug, instance)

        return slug

    def to_single(self, thing: Any, instance: Optional[Any] = None) -> T:
        """Ensure the output of something is a single, transformed value."""
        if is_array_like(thing):
            thing = next(iter(thing), None)
        return self.transform_output(thing, instance)

    def to_many(self, things: Any) -> list[T]:
        """
        Ensure the output of something is a list of transformed values.

        A non-collection (None included) is wrapped first, so to_many(None)
        yields one empty instance while to_many([]) yields none.
        """
        if not is_array_like(things):
            things = [things]
        return [self.transform_output(thing) for thing in list(things)]

    def __repr__(self) -> str:
        return f"Mapper({self.entity_type.__name__}, transforms={len(self._transforms)})"


__all__ = ["Mapper", "RESERVED_FIELDS", "data_fields", "is_array_like"]
