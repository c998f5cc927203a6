"""Core task service — executes one parsed command against the store.

This is the central service class consumed by the CLI layer.  It
depends on a :class:`~odo.core.protocols.TaskStore` injected at
construction time, keeping the core free of any ``sqlite3`` import.

Guarantees
----------
* Every mutation runs inside one store transaction, so a failure at any
  point (including a row-count check) leaves the store unchanged.
* Every mutation must touch exactly one row.  Zero rows is reported as
  :class:`~odo.exceptions.NotFoundError`; more than one is a
  :class:`~odo.exceptions.ConsistencyError`.
* Only :class:`~odo.exceptions.OdoError` subclasses escape.
* No entity state is cached between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from functools import partial

from odo.core.commands import (
    AddAction,
    AddGoal,
    Command,
    ListActions,
    ListGoals,
    RemoveAction,
    RemoveGoal,
    RenameAction,
    RenameGoal,
    SetGoalAction,
    UnsetGoalAction,
)
from odo.core.models import Action, Goal
from odo.core.protocols import TaskStore
from odo.exceptions import ConsistencyError, NotFoundError, OdoError, StoreError, quote

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Listing output
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Descriptions:
    """Lazy, finite, restartable sequence of entity descriptions.

    Each iteration re-reads the store, so iterating twice yields the
    store's state at the time of each pass.
    """

    source: Callable[[], Iterator[Action | Goal]]

    def __iter__(self) -> Iterator[str]:
        for entity in self.source():
            yield entity.description


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class TaskService:
    """Stateless service that performs CRUD on actions and goals.

    Parameters
    ----------
    store:
        Any object satisfying the :class:`TaskStore` protocol.
    """

    def __init__(self, store: TaskStore) -> None:
        self._store: TaskStore = store

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def run(self, command: Command) -> Descriptions | None:
        """Execute *command*; listings return :class:`Descriptions`."""
        logger.debug("Running %r", command)
        if isinstance(command, AddAction):
            self.add_action(command.description)
        elif isinstance(command, ListActions):
            return self.list_actions()
        elif isinstance(command, RemoveAction):
            self.remove_action(command.description)
        elif isinstance(command, RenameAction):
            self.rename_action(command.old_description, command.new_description)
        elif isinstance(command, AddGoal):
            self.add_goal(command.description, action=command.action)
        elif isinstance(command, ListGoals):
            return self.list_goals(include_linked=command.include_linked)
        elif isinstance(command, RemoveGoal):
            self.remove_goal(command.description)
        elif isinstance(command, SetGoalAction):
            self.set_goal_action(command.description, command.action)
        elif isinstance(command, RenameGoal):
            self.rename_goal(command.old_description, command.new_description)
        elif isinstance(command, UnsetGoalAction):
            self.unset_goal_action(command.description)
        else:
            raise TypeError(f"unsupported command: {command!r}")
        return None

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def add_action(self, description: str) -> None:
        with self._atomic("add action"):
            self._store.add_action(description)

    def list_actions(self) -> Descriptions:
        return Descriptions(self._store.iter_actions)

    def remove_action(self, description: str) -> None:
        """Remove an action; goals that referenced it become unlinked."""
        with self._atomic("remove action"):
            count = self._store.remove_action(description)
            _expect_one(count, "action", description)

    def rename_action(self, old_description: str, new_description: str) -> None:
        """Rename an action; goals that referenced it follow the rename."""
        with self._atomic("rename action"):
            count = self._store.rename_action(old_description, new_description)
            _expect_one(count, "action", old_description)

    # ------------------------------------------------------------------
    # Goals
    # ------------------------------------------------------------------

    def add_goal(self, description: str, *, action: str | None = None) -> None:
        with self._atomic("add goal"):
            self._store.add_goal(description, action)

    def list_goals(self, *, include_linked: bool = False) -> Descriptions:
        return Descriptions(partial(self._store.iter_goals, include_linked=include_linked))

    def remove_goal(self, description: str) -> None:
        with self._atomic("remove goal"):
            count = self._store.remove_goal(description)
            _expect_one(count, "goal", description)

    def rename_goal(self, old_description: str, new_description: str) -> None:
        with self._atomic("rename goal"):
            count = self._store.rename_goal(old_description, new_description)
            _expect_one(count, "goal", old_description)

    def set_goal_action(self, description: str, action: str) -> None:
        with self._atomic("set goal action"):
            count = self._store.set_goal_action(description, action)
            _expect_one(count, "goal", description)

    def unset_goal_action(self, description: str) -> None:
        with self._atomic("unset goal action"):
            count = self._store.set_goal_action(description, None)
            _expect_one(count, "goal", description)

    # ------------------------------------------------------------------
    # Store delegation (safe boundary)
    # ------------------------------------------------------------------

    @contextmanager
    def _atomic(self, doing: str) -> Iterator[None]:
        """Run the body in one store transaction; only our errors escape."""
        try:
            with self._store.transaction():
                yield
        except OdoError:
            # Already one of ours; propagate unchanged.
            raise
        except Exception as exc:
            raise StoreError(f"unable to {doing}: {exc}") from exc


def _expect_one(count: int, kind: str, description: str) -> None:
    """Check the affected-row count of a single-row mutation."""
    if count == 0:
        raise NotFoundError(f"no such {kind}: {quote(description)}")
    if count > 1:
        raise ConsistencyError(
            f"{count} {kind}s matched {quote(description)}; expected one",
        )
