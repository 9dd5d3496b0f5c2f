from dataclasses import dataclass
from typing import Any, Optional

import pytest

from sourcerepo.config import Settings, reset_settings_cache
from sourcerepo.repository import Repository


@dataclass
class User:
    id: Optional[Any] = None
    name: str = ""


class Person:
    def __init__(self):
        self.name = ""
        self.age = None


class Blank:
    pass


class RecordingLogger:
    """Stands in for a structlog BoundLogger and keeps (level, event, kw) tuples."""

    def __init__(self):
        self.records = []

    def _record(self, level):
        def log(event, **kw):
            self.records.append((level, event, kw))
        return log

    def __getattr__(self, level):
        return self._record(level)

    def events(self, level):
        return [(event, kw) for lvl, event, kw in self.records if lvl == level]


def user_transform(slug, raw, instance):
    """Dual-mode transform: name <-> n, id as string on the wire and on the way out."""
    if slug is not None:
        slug["id"] = str(slug["id"])
        slug["n"] = slug.pop("name")
    else:
        raw["name"] = raw.pop("n")
        raw["id"] = str(raw["id"])


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    for key in ("ENVIRONMENT", "LOG_LEVEL", "LOG_FORMAT", "SLOW_CALL_MS"):
        monkeypatch.delenv(f"SOURCEREPO_{key}", raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def settings():
    return Settings(environment="local", slow_call_ms=0)


@pytest.fixture
def user_repository(settings):
    return Repository(User, settings=settings).use(user_transform)


@pytest.fixture
def blank_repository(settings):
    return Repository(Blank, settings=settings)
