"""
sourcerepo - Async Repository Facade
Typed CRUD operations over heterogeneous sources through a bidirectional mapper
"""

from sourcerepo.config import Settings, get_settings
from sourcerepo.exceptions import (
    DuplicateBindingError,
    RepositoryError,
    UnboundOperationError,
    UnknownOperationError,
)
from sourcerepo.mapping import (
    CoerceField,
    DropField,
    FunctionTransform,
    Mapper,
    RenameField,
    Transform,
)
from sourcerepo.observability import configure_logging, get_logger
from sourcerepo.providers import InMemorySource
from sourcerepo.repository import OPERATIONS, ProviderBindings, Repository, SourceProvider

__version__ = "0.1.0"

__all__ = [
    # Core
    "Mapper",
    "Repository",
    "ProviderBindings",
    "SourceProvider",
    "OPERATIONS",
    # Transforms
    "Transform",
    "FunctionTransform",
    "RenameField",
    "CoerceField",
    "DropField",
    # Providers
    "InMemorySource",
    # Errors
    "RepositoryError",
    "UnboundOperationError",
    "DuplicateBindingError",
    "UnknownOperationError",
    # Ambient
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
]
