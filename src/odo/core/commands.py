"""Typed command values produced by :mod:`odo.core.parser`.

The set of variants is closed: :data:`Command` is the union of every
dataclass below, and :class:`~odo.core.task_service.TaskService`
dispatches on the concrete type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


# ---------------------------------------------------------------------------
# action ...
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class AddAction:
    description: str


@dataclass(frozen=True, slots=True)
class ListActions:
    pass


@dataclass(frozen=True, slots=True)
class RemoveAction:
    description: str


@dataclass(frozen=True, slots=True)
class RenameAction:
    """``action set description <old> <new...>``."""

    old_description: str
    new_description: str


# ---------------------------------------------------------------------------
# goal ...
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class AddGoal:
    description: str
    action: str | None = None


@dataclass(frozen=True, slots=True)
class ListGoals:
    include_linked: bool = False
    """``True`` for ``goal ls --all``."""


@dataclass(frozen=True, slots=True)
class RemoveGoal:
    description: str


@dataclass(frozen=True, slots=True)
class SetGoalAction:
    """``goal set action <description> <new-action...>``."""

    description: str
    action: str


@dataclass(frozen=True, slots=True)
class RenameGoal:
    """``goal set description <old> <new...>``."""

    old_description: str
    new_description: str


@dataclass(frozen=True, slots=True)
class UnsetGoalAction:
    description: str


Command = Union[
    AddAction,
    ListActions,
    RemoveAction,
    RenameAction,
    AddGoal,
    ListGoals,
    RemoveGoal,
    SetGoalAction,
    RenameGoal,
    UnsetGoalAction,
]
