"""Infrastructure: locate and create the per-user data directory.

The database lives in ``<user data dir>/odo/odo.sqlite3``:

* Linux and other Unix: ``$XDG_DATA_HOME`` or ``~/.local/share``
* macOS: ``~/Library/Application Support``
* Windows: ``%APPDATA%``

Rules
-----
* No ``print()`` — callers handle user-facing output.
* The directory is private to the user (mode ``0o700``) where the
  platform honours POSIX permissions.
"""

from __future__ import annotations

import logging
import os
import platform
from pathlib import Path

from odo.exceptions import EnvironmentError, quote

logger = logging.getLogger(__name__)

APP_NAME = "odo"
DATABASE_NAME = "odo.sqlite3"
_PRIVATE_MODE = 0o700


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def _platform_data_home() -> Path:
    """Return the OS-specific base directory for per-user application data."""
    system = platform.system().lower()
    try:
        home = Path.home()
    except RuntimeError as exc:
        raise EnvironmentError("unable to determine project directories") from exc

    if system == "windows":
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else home / "AppData" / "Roaming"
    if system == "darwin":
        return home / "Library" / "Application Support"
    xdg = os.environ.get("XDG_DATA_HOME")
    # XDG requires an absolute path; relative values are ignored.
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)
    return home / ".local" / "share"


def default_data_dir() -> Path:
    """Return the default odo data directory for the current platform."""
    return _platform_data_home() / APP_NAME


def database_path(data_dir: Path) -> Path:
    return data_dir / DATABASE_NAME


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------

def _uses_private_mode() -> bool:
    return os.name == "posix" and platform.system().lower() != "darwin"


def ensure_data_dir(data_dir: Path | None = None) -> Path:
    """Create *data_dir* (default: :func:`default_data_dir`) if needed.

    Raises
    ------
    EnvironmentError
        When the directory cannot be resolved or created.
    """
    target = data_dir if data_dir is not None else default_data_dir()
    try:
        if _uses_private_mode():
            target.mkdir(mode=_PRIVATE_MODE, parents=True, exist_ok=True)
        else:
            target.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise EnvironmentError(
            f"unable to create {quote(str(target))}: {exc.strerror or exc}",
            hint="Set ODO_DATA_DIR to a writable directory.",
        ) from exc
    logger.debug("Using data directory %s", target)
    return target
