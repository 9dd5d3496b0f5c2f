"""Bidirectional mapping between raw payloads and typed instances."""
from sourcerepo.mapping.mapper import RESERVED_FIELDS, Mapper, data_fields, is_array_like
from sourcerepo.mapping.transform import (
    CoerceField,
    DropField,
    FunctionTransform,
    RenameField,
    Transform,
    as_transform,
)

__all__ = [
    "Mapper",
    "RESERVED_FIELDS",
    "data_fields",
    "is_array_like",
    "Transform",
    "FunctionTransform",
    "RenameField",
    "CoerceField",
    "DropField",
    "as_transform",
]
