"""
Centralized configuration for sourcerepo.

- Pure Python dataclass loaded from OS env; a .env file is parsed with python-dotenv.
- Validation in __post_init__.
- Immutable singleton via functools.lru_cache.
"""

from __future__ import annotations

import functools
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional, cast

from dotenv import load_dotenv

ENV_PREFIX = "SOURCEREPO_"


# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------
def _load_dotenv(env_path: Path) -> None:
    if env_path.exists():
        load_dotenv(dotenv_path=str(env_path), override=False)


def _get_env_str(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(ENV_PREFIX + key, default)


def _get_env_int(key: str, default: int) -> int:
    v = os.getenv(ENV_PREFIX + key)
    if v is None or v.strip() == "":
        return default
    try:
        return int(v)
    except ValueError:
        raise ValueError(f"Env var {ENV_PREFIX + key} must be an integer")


def _validate_choice(value: str, *, choices: tuple[str, ...], key: str) -> str:
    if value not in choices:
        raise ValueError(f"{key} must be one of {choices}, got {value!r}")
    return value


# ------------------------------------------------------------------------------
# Settings dataclass (immutable)
# ------------------------------------------------------------------------------
EnvName = Literal["local", "dev", "staging", "prod"]
LogFormat = Literal["json", "console"]


@dataclass(frozen=True)
class Settings:
    # Environment
    environment: EnvName = "local"

    # Observability
    log_level: str = "INFO"
    log_format: Optional[LogFormat] = None
    slow_call_ms: int = 500  # 0 disables the slow provider warning

    # Derived/computed flags (filled in __post_init__)
    is_prod: bool = field(init=False)
    is_local: bool = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "environment",
            _validate_choice(self.environment, choices=("local", "dev", "staging", "prod"), key="ENVIRONMENT"),
        )

        if not re.fullmatch(r"(?i)DEBUG|INFO|WARNING|ERROR|CRITICAL", self.log_level.strip()):
            raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        object.__setattr__(self, "log_level", self.log_level.strip().upper())

        if self.log_format is None:
            fmt = "console" if self.environment in ("local", "dev") else "json"
            object.__setattr__(self, "log_format", fmt)
        else:
            _validate_choice(self.log_format, choices=("json", "console"), key="LOG_FORMAT")

        if self.slow_call_ms < 0:
            raise ValueError("SLOW_CALL_MS must be >= 0")

        object.__setattr__(self, "is_prod", self.environment == "prod")
        object.__setattr__(self, "is_local", self.environment == "local")

    @property
    def json_logs(self) -> bool:
        return self.log_format == "json"

    def safe_dict(self) -> dict:
        return {
            "environment": self.environment,
            "log_level": self.log_level,
            "log_format": self.log_format,
            "slow_call_ms": self.slow_call_ms,
        }


# ------------------------------------------------------------------------------
# Loader (singleton)
# ------------------------------------------------------------------------------
_logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    # .env at the repo root (../../.env relative to src/sourcerepo/)
    _load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

    settings = Settings(
        environment=cast(EnvName, _get_env_str("ENVIRONMENT", "local") or "local"),
        log_level=_get_env_str("LOG_LEVEL", "INFO") or "INFO",
        log_format=cast(Optional[LogFormat], _get_env_str("LOG_FORMAT") or None),
        slow_call_ms=_get_env_int("SLOW_CALL_MS", 500),
    )

    _logger.debug("Settings loaded", extra={"settings": settings.safe_dict()})
    return settings


def reset_settings_cache() -> None:
    """Drop the cached Settings so the next get_settings() re-reads the env."""
    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
