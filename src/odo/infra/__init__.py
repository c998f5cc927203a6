"""Infrastructure layer — external system integration.

This layer wraps all interaction with SQLite and the operating system.
Every raw third-party exception must be caught here and re-raised as an
:class:`~odo.exceptions.OdoError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from odo.infra.data_dir import database_path, default_data_dir, ensure_data_dir
from odo.infra.sqlite_store import SqliteStore, open_store

__all__: list[str] = [
    "SqliteStore",
    "database_path",
    "default_data_dir",
    "ensure_data_dir",
    "open_store",
]
