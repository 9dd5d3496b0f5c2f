"""Async repository facade over sourced providers."""
from sourcerepo.repository.bindings import ProviderBindings
from sourcerepo.repository.provider import CAPABILITY_NAMES, OPERATIONS, SourceProvider
from sourcerepo.repository.repository import Repository

__all__ = ["Repository", "ProviderBindings", "SourceProvider", "OPERATIONS", "CAPABILITY_NAMES"]
