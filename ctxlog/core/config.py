"""Environment-driven settings for the logging integration."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..constants import DEFAULT_KEY_NAME

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _load_env(dotenv_path: Optional[Path] = None) -> None:
    """Load the .env file once for the process."""

    if getattr(_load_env, "_loaded", False):  # type: ignore[attr-defined]
        return

    load_dotenv(dotenv_path)
    setattr(_load_env, "_loaded", True)  # type: ignore[attr-defined]


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


@dataclass(frozen=True)
class Settings:
    """Container for ctxlog configuration."""

    log_level: str = "INFO"
    log_dir: Optional[Path] = None
    console: bool = True
    rich_tracebacks: bool = True
    primary_key_name: str = DEFAULT_KEY_NAME
    suppress_errors: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Instantiate settings using environment overrides when present."""

        _load_env()
        defaults = cls()
        raw_dir = os.getenv("CTXLOG_LOG_DIR", "").strip()
        key_name = os.getenv("CTXLOG_PRIMARY_KEY", defaults.primary_key_name).strip()
        if not key_name:
            raise ValueError("CTXLOG_PRIMARY_KEY must not be empty.")
        return cls(
            log_level=os.getenv("CTXLOG_LOG_LEVEL", defaults.log_level).strip().upper(),
            log_dir=Path(raw_dir) if raw_dir else None,
            console=_get_bool("CTXLOG_CONSOLE", defaults.console),
            rich_tracebacks=_get_bool("CTXLOG_RICH_TRACEBACKS", defaults.rich_tracebacks),
            primary_key_name=key_name,
            suppress_errors=_get_bool("CTXLOG_SUPPRESS_ERRORS", defaults.suppress_errors),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""

    return Settings.from_env()
