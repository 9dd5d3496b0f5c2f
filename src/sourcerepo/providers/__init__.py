from sourcerepo.providers.memory import InMemorySource

__all__ = ["InMemorySource"]
