from typing import Any, Dict, Optional


# ───────────────────────── Base & Repository Exceptions ─────────────────────────
class RepositoryError(Exception):
    """Base class for errors raised by the mapper/repository layer."""
    code: str = "repository_error"
    message: str
    details: Optional[Dict[str, Any]]

    def __init__(
        self,
        message: str = "",
        *,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message or self.__class__.__name__)
        if code is not None:
            self.code = code
        self.message = message or self.__class__.__name__
        self.details = details


class UnboundOperationError(RepositoryError):
    # recoverable: surfaces when the operation is awaited
    code = "unbound_operation"


class DuplicateBindingError(RepositoryError):
    # configuration error: raised synchronously from Repository.source()
    code = "duplicate_binding"


class UnknownOperationError(RepositoryError, KeyError):
    code = "unknown_operation"

    def __str__(self) -> str:
        return self.message


__all__ = [
    "RepositoryError",
    "UnboundOperationError",
    "DuplicateBindingError",
    "UnknownOperationError",
]
