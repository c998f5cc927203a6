"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager
from typing import Protocol

from odo.core.models import Action, Goal


class TaskStore(Protocol):
    """Contract for the durable home of actions and goals.

    Implementations enforce uniqueness and the goal → action foreign key
    themselves and must map every backend exception to an
    :class:`~odo.exceptions.OdoError` subclass:

    * a description collision raises
      :class:`~odo.exceptions.AlreadyExistsError`;
    * an unresolvable action reference raises
      :class:`~odo.exceptions.DependencyError`;
    * anything else raises :class:`~odo.exceptions.StoreError`.

    Mutators return the number of rows they affected and leave the
    interpretation of that count to the caller.
    """

    def transaction(self) -> AbstractContextManager[None]:
        """Scope in which every mutation commits together or not at all."""
        ...  # pragma: no cover

    def add_action(self, description: str) -> None:
        ...  # pragma: no cover

    def iter_actions(self) -> Iterator[Action]:
        """Yield every action in insertion order."""
        ...  # pragma: no cover

    def remove_action(self, description: str) -> int:
        """Delete an action; referencing goals lose their link."""
        ...  # pragma: no cover

    def rename_action(self, old_description: str, new_description: str) -> int:
        """Rename an action; referencing goals follow the new name."""
        ...  # pragma: no cover

    def add_goal(self, description: str, action: str | None) -> None:
        ...  # pragma: no cover

    def iter_goals(self, *, include_linked: bool) -> Iterator[Goal]:
        """Yield goals in insertion order.

        With ``include_linked=False`` only goals without an action are
        yielded.
        """
        ...  # pragma: no cover

    def remove_goal(self, description: str) -> int:
        ...  # pragma: no cover

    def rename_goal(self, old_description: str, new_description: str) -> int:
        ...  # pragma: no cover

    def set_goal_action(self, description: str, action: str | None) -> int:
        """Link a goal to *action*, or unlink it when *action* is ``None``."""
        ...  # pragma: no cover
