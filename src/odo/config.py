"""Environment-variable configuration for odo.

Environment Variables
---------------------
* ``ODO_DATA_DIR`` — data directory override; must be absolute
  (default: the platform data directory, see :mod:`odo.infra.data_dir`).
* ``ODO_LOG_LEVEL`` — ``DEBUG``, ``INFO``, ``WARNING``, ``ERROR`` or
  ``CRITICAL`` (default: ``WARNING``).
* ``ODO_BUSY_TIMEOUT`` — seconds to wait on a locked database
  (default: ``5``).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from odo.exceptions import ConfigError, quote
from odo.infra.sqlite_store import DEFAULT_BUSY_TIMEOUT

VALID_LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class Settings:
    """Validated runtime settings."""

    data_dir: Path | None = None
    """Explicit data directory, or ``None`` for the platform default."""

    log_level: str = "WARNING"

    busy_timeout: float = DEFAULT_BUSY_TIMEOUT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from *environ* (default: ``os.environ``).

        Raises
        ------
        ConfigError
            When any variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        return cls(
            data_dir=_data_dir(env.get("ODO_DATA_DIR")),
            log_level=_log_level(env.get("ODO_LOG_LEVEL")),
            busy_timeout=_busy_timeout(env.get("ODO_BUSY_TIMEOUT")),
        )


def _data_dir(raw: str | None) -> Path | None:
    if not raw:
        return None
    path = Path(raw).expanduser()
    if not path.is_absolute():
        raise ConfigError(f"ODO_DATA_DIR must be an absolute path: {quote(raw)}")
    return path


def _log_level(raw: str | None) -> str:
    if not raw:
        return "WARNING"
    level = raw.strip().upper()
    if level not in VALID_LOG_LEVELS:
        raise ConfigError(
            f"invalid ODO_LOG_LEVEL: {quote(raw)}",
            hint=f"Use one of {', '.join(VALID_LOG_LEVELS)}.",
        )
    return level


def _busy_timeout(raw: str | None) -> float:
    if not raw:
        return DEFAULT_BUSY_TIMEOUT
    try:
        seconds = float(raw)
    except ValueError as exc:
        raise ConfigError(f"invalid ODO_BUSY_TIMEOUT: {quote(raw)}") from exc
    if seconds < 0:
        raise ConfigError("ODO_BUSY_TIMEOUT must not be negative")
    return seconds
