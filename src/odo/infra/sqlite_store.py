"""SQLite backed implementation of :class:`~odo.core.protocols.TaskStore`.

This module is the **only** place in the codebase that imports
``sqlite3``.  All ``sqlite3`` exceptions are caught here and re-raised
as typed :class:`~odo.exceptions.OdoError` subclasses — nothing raw
escapes the infrastructure boundary.

Referential integrity is declarative: the ``goals.action`` foreign key
cascades renames and nulls out deleted actions inside the same
statement, so no application code fixes up goals by hand.  Foreign-key
enforcement is per connection in SQLite and is switched on every time
a store is opened.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from odo.core.models import Action, Goal
from odo.exceptions import (
    AlreadyExistsError,
    DependencyError,
    EnvironmentError,
    StoreError,
    quote,
)
from odo.infra.data_dir import database_path, ensure_data_dir

logger = logging.getLogger(__name__)

DEFAULT_BUSY_TIMEOUT: float = 5.0
"""Seconds to wait on a locked database before reporting an error."""

SCHEMA = """
CREATE TABLE IF NOT EXISTS actions (
    description TEXT PRIMARY KEY NOT NULL
);
CREATE TABLE IF NOT EXISTS goals (
    description TEXT PRIMARY KEY NOT NULL,
    action TEXT NULL
        REFERENCES actions (description)
        ON UPDATE CASCADE
        ON DELETE SET NULL
);
"""

# Native SQLite constraint messages; classification follows what the
# engine reports rather than guessing which constraint the caller hit.
_UNIQUE_FAILED = "UNIQUE constraint failed"
_FOREIGN_KEY_FAILED = "FOREIGN KEY constraint failed"


class SqliteStore:
    """Concrete :class:`TaskStore` over one ``sqlite3`` connection.

    Usage::

        with open_store() as store:
            store.initialize_schema()
            TaskService(store).run(command)

    The store is scoped to one invocation; closing it closes the
    connection.
    """

    def __init__(self, connection: sqlite3.Connection, *, path: Path | None = None) -> None:
        self._connection: sqlite3.Connection = connection
        self.path: Path | None = path

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def __enter__(self) -> SqliteStore:
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    def close(self) -> None:
        self._connection.close()

    def initialize_schema(self) -> None:
        """Create the ``actions`` and ``goals`` tables when absent."""
        try:
            self._connection.executescript(SCHEMA)
        except sqlite3.Error as exc:
            raise StoreError(f"unable to initialize database: {exc}") from exc

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Commit on success, roll back on any exception."""
        try:
            with self._connection:
                yield
        except sqlite3.Error as exc:
            raise StoreError(f"unable to commit: {exc}") from exc

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def add_action(self, description: str) -> None:
        self._execute(
            "add action",
            "INSERT INTO actions (description) VALUES (?)",
            (description,),
            duplicate=f"action {quote(description)} already exists",
        )

    def iter_actions(self) -> Iterator[Action]:
        for (description,) in self._query(
            "load actions",
            "SELECT description FROM actions ORDER BY rowid",
        ):
            yield Action(description=description)

    def remove_action(self, description: str) -> int:
        return self._execute(
            "remove action",
            "DELETE FROM actions WHERE description = ?",
            (description,),
        )

    def rename_action(self, old_description: str, new_description: str) -> int:
        return self._execute(
            "rename action",
            "UPDATE actions SET description = ? WHERE description = ?",
            (new_description, old_description),
            duplicate=f"action {quote(new_description)} already exists",
        )

    # ------------------------------------------------------------------
    # Goals
    # ------------------------------------------------------------------

    def add_goal(self, description: str, action: str | None) -> None:
        self._execute(
            "add goal",
            "INSERT INTO goals (description, action) VALUES (?, ?)",
            (description, action),
            duplicate=f"goal {quote(description)} already exists",
            dependency=f"no such action: {quote(action or '')}",
        )

    def iter_goals(self, *, include_linked: bool) -> Iterator[Goal]:
        sql = "SELECT description, action FROM goals"
        if not include_linked:
            sql += " WHERE action IS NULL"
        for description, action in self._query("load goals", sql + " ORDER BY rowid"):
            yield Goal(description=description, action=action)

    def remove_goal(self, description: str) -> int:
        return self._execute(
            "remove goal",
            "DELETE FROM goals WHERE description = ?",
            (description,),
        )

    def rename_goal(self, old_description: str, new_description: str) -> int:
        return self._execute(
            "rename goal",
            "UPDATE goals SET description = ? WHERE description = ?",
            (new_description, old_description),
            duplicate=f"goal {quote(new_description)} already exists",
        )

    def set_goal_action(self, description: str, action: str | None) -> int:
        return self._execute(
            "set goal action",
            "UPDATE goals SET action = ? WHERE description = ?",
            (action, description),
            dependency=f"no such action: {quote(action or '')}",
        )

    # ------------------------------------------------------------------
    # Exception mapping
    # ------------------------------------------------------------------

    def _execute(
        self,
        doing: str,
        sql: str,
        params: Sequence[Any],
        *,
        duplicate: str | None = None,
        dependency: str | None = None,
    ) -> int:
        """Run one mutating statement and return its affected-row count."""
        try:
            cursor = self._connection.execute(sql, params)
        except sqlite3.IntegrityError as exc:
            message = str(exc)
            if duplicate is not None and message.startswith(_UNIQUE_FAILED):
                raise AlreadyExistsError(duplicate) from exc
            if dependency is not None and message.startswith(_FOREIGN_KEY_FAILED):
                raise DependencyError(dependency) from exc
            raise StoreError(f"unable to {doing}: {exc}") from exc
        except sqlite3.Error as exc:
            raise StoreError(f"unable to {doing}: {exc}") from exc
        logger.debug("%s: %d row(s) affected", doing, cursor.rowcount)
        return cursor.rowcount

    def _query(self, doing: str, sql: str) -> Iterator[tuple[Any, ...]]:
        """Yield rows lazily, mapping errors raised mid-iteration too."""
        try:
            yield from self._connection.execute(sql)
        except sqlite3.Error as exc:
            raise StoreError(f"unable to {doing}: {exc}") from exc


# ---------------------------------------------------------------------------
# Opening and schema
# ---------------------------------------------------------------------------

def open_store(
    data_dir: Path | None = None,
    *,
    busy_timeout: float = DEFAULT_BUSY_TIMEOUT,
) -> SqliteStore:
    """Open (creating if needed) the database inside *data_dir*.

    Raises
    ------
    EnvironmentError
        When the data directory or the database file cannot be opened.
    """
    directory = ensure_data_dir(data_dir)
    path = database_path(directory)
    try:
        connection = sqlite3.connect(str(path), timeout=busy_timeout)
        connection.execute("PRAGMA foreign_keys = ON")
    except sqlite3.Error as exc:
        raise EnvironmentError(f"unable to open {quote(str(path))}: {exc}") from exc
    logger.debug("Opened %s", path)
    return SqliteStore(connection, path=path)
