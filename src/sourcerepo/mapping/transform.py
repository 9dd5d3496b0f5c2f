"""
Transform Protocol (Bidirectional Pipeline Step)
Contract for every step registered on a Mapper
"""
from __future__ import annotations

from typing import Any, Callable, Literal, MutableMapping, Optional, Protocol, runtime_checkable

Raw = MutableMapping[str, Any]
Slug = MutableMapping[str, Any]
DualModeFunction = Callable[[Optional[Slug], Optional[Raw], Any], Any]


@runtime_checkable
class Transform(Protocol):
    """
    A pure, ordered pipeline step with one method per direction.

    Output steps run in registration order, input steps in reverse
    registration order, so the last step added is the first to see a slug.
    Transforms are trusted: exceptions propagate to the caller unchanged.
    """

    def apply_output(self, raw: Raw, instance: Any) -> Any | None:
        """
        Reshape a raw payload (and/or the instance) on the way out of a source.

        Args:
            raw: Raw payload; may be mutated (keys left behind are copied onto the instance)
            instance: Working typed instance; may be mutated

        Returns:
            A replacement instance, or None to keep the current one
        """
        ...

    def apply_input(self, slug: Slug, instance: Any) -> None:
        """
        Reshape a slug in place on the way into a source.

        Args:
            slug: Mapping being built for the provider
            instance: The typed (or plain mapping) item the slug was built from
        """
        ...


class FunctionTransform:
    """
    Adapts a dual-mode callable ``f(slug, raw, instance)``.

    Output direction calls ``f(None, raw, instance)``; input direction calls
    ``f(slug, None, instance)``. Which argument is None tells the function
    which way it is being run.
    """

    def __init__(self, func: DualModeFunction) -> None:
        self.func = func

    def apply_output(self, raw: Raw, instance: Any) -> Any | None:
        return self.func(None, raw, instance)

    def apply_input(self, slug: Slug, instance: Any) -> None:
        self.func(slug, None, instance)

    def __repr__(self) -> str:
        return f"FunctionTransform({getattr(self.func, '__name__', self.func)!r})"


class RenameField:
    """Maps wire key ``raw_key`` to instance field ``field`` and back."""

    def __init__(self, raw_key: str, field: str) -> None:
        self.raw_key = raw_key
        self.field = field

    def apply_output(self, raw: Raw, instance: Any) -> None:
        if self.raw_key in raw:
            raw[self.field] = raw.pop(self.raw_key)

    def apply_input(self, slug: Slug, instance: Any) -> None:
        if self.field in slug:
            slug[self.raw_key] = slug.pop(self.field)

    def __repr__(self) -> str:
        return f"RenameField({self.raw_key!r} <-> {self.field!r})"


class CoerceField:
    """
    Converts one field's value per direction.

    Usage:
        CoerceField("id", output=str, input=int)
    """

    def __init__(
        self,
        field: str,
        output: Optional[Callable[[Any], Any]] = None,
        input: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        self.field = field
        self.output = output
        self.input = input

    def apply_output(self, raw: Raw, instance: Any) -> None:
        if self.output is not None and self.field in raw:
            raw[self.field] = self.output(raw[self.field])

    def apply_input(self, slug: Slug, instance: Any) -> None:
        if self.input is not None and self.field in slug:
            slug[self.field] = self.input(slug[self.field])

    def __repr__(self) -> str:
        return f"CoerceField({self.field!r})"


Direction = Literal["input", "output", "both"]


class DropField:
    """Removes a key from the slug, the raw payload, or both."""

    def __init__(self, field: str, direction: Direction = "input") -> None:
        if direction not in ("input", "output", "both"):
            raise ValueError(f"direction must be 'input', 'output' or 'both', got {direction!r}")
        self.field = field
        self.direction = direction

    def apply_output(self, raw: Raw, instance: Any) -> None:
        if self.direction in ("output", "both"):
            raw.pop(self.field, None)

    def apply_input(self, slug: Slug, instance: Any) -> None:
        if self.direction in ("input", "both"):
            slug.pop(self.field, None)

    def __repr__(self) -> str:
        return f"DropField({self.field!r}, direction={self.direction!r})"


def as_transform(step: Transform | DualModeFunction) -> Transform:
    """Accept either a Transform or a plain dual-mode callable."""
    if isinstance(step, Transform):
        return step
    if callable(step):
        return FunctionTransform(step)
    raise TypeError(f"Expected a Transform or a callable, got {type(step).__name__}")


__all__ = [
    "Transform",
    "FunctionTransform",
    "RenameField",
    "CoerceField",
    "DropField",
    "as_transform",
]
