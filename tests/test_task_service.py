"""Tests for TaskService (core/task_service.py).

Most tests run against a real SQLite store in ``tmp_path`` so that the
uniqueness and cascade guarantees are exercised end to end.  A mocked
store covers the row-count contract and exception wrapping.
"""

from __future__ import annotations

from contextlib import nullcontext
from unittest.mock import MagicMock

import pytest

from odo.core.commands import (
    AddAction,
    AddGoal,
    ListActions,
    ListGoals,
    RemoveAction,
    RemoveGoal,
    RenameAction,
    RenameGoal,
    SetGoalAction,
    UnsetGoalAction,
)
from odo.core.models import Goal
from odo.core.task_service import Descriptions, TaskService
from odo.exceptions import (
    AlreadyExistsError,
    ConsistencyError,
    DependencyError,
    NotFoundError,
    StoreError,
)
from odo.infra.sqlite_store import SqliteStore


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _goals(store: SqliteStore) -> list[Goal]:
    return list(store.iter_goals(include_linked=True))


def _mock_store() -> MagicMock:
    store = MagicMock()
    store.transaction.side_effect = lambda: nullcontext()
    return store


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

class TestActions:
    def test_add_then_list(self, service: TaskService) -> None:
        service.add_action("Read *Network Effect*.")
        assert list(service.list_actions()) == ["Read *Network Effect*."]

    def test_list_in_insertion_order(self, service: TaskService) -> None:
        service.add_action("Zebra")
        service.add_action("Apple")
        assert list(service.list_actions()) == ["Zebra", "Apple"]

    def test_list_empty(self, service: TaskService) -> None:
        assert list(service.list_actions()) == []

    def test_add_duplicate(self, service: TaskService) -> None:
        service.add_action("Borrow Book")
        with pytest.raises(AlreadyExistsError, match="action `Borrow Book` already exists"):
            service.add_action("Borrow Book")
        assert list(service.list_actions()) == ["Borrow Book"]

    def test_round_trip_remove(self, service: TaskService) -> None:
        service.add_action("X")
        service.remove_action("X")
        assert list(service.list_actions()) == []

    def test_remove_missing(self, service: TaskService) -> None:
        service.add_action("Keep")
        with pytest.raises(NotFoundError, match="no such action: `Gone`"):
            service.remove_action("Gone")
        assert list(service.list_actions()) == ["Keep"]

    def test_rename(self, service: TaskService) -> None:
        service.add_action("Borrow Book")
        service.rename_action("Borrow Book", "Buy Book")
        assert list(service.list_actions()) == ["Buy Book"]

    def test_rename_keeps_position(self, service: TaskService) -> None:
        service.add_action("First")
        service.add_action("Second")
        service.rename_action("First", "Renamed")
        assert list(service.list_actions()) == ["Renamed", "Second"]

    def test_rename_missing(self, service: TaskService) -> None:
        with pytest.raises(NotFoundError, match="no such action: `Nope`"):
            service.rename_action("Nope", "Other")

    def test_rename_onto_existing(self, service: TaskService) -> None:
        service.add_action("A")
        service.add_action("B")
        with pytest.raises(AlreadyExistsError, match="action `B` already exists"):
            service.rename_action("A", "B")
        assert list(service.list_actions()) == ["A", "B"]


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------

class TestGoals:
    def test_add_unlinked(self, service: TaskService, store: SqliteStore) -> None:
        service.add_goal("Read Book")
        assert _goals(store) == [Goal(description="Read Book", action=None)]

    def test_add_linked(self, service: TaskService, store: SqliteStore) -> None:
        service.add_action("Borrow Book")
        service.add_goal("Read Book", action="Borrow Book")
        assert _goals(store) == [Goal(description="Read Book", action="Borrow Book")]

    def test_add_with_missing_action(self, service: TaskService, store: SqliteStore) -> None:
        with pytest.raises(DependencyError, match="no such action: `Borrow Book`"):
            service.add_goal("Read Book", action="Borrow Book")
        assert _goals(store) == []

    def test_add_duplicate(self, service: TaskService) -> None:
        service.add_goal("Read Book")
        with pytest.raises(AlreadyExistsError, match="goal `Read Book` already exists"):
            service.add_goal("Read Book")

    def test_duplicate_wins_over_missing_action(self, service: TaskService) -> None:
        service.add_goal("Read Book")
        with pytest.raises(AlreadyExistsError):
            service.add_goal("Read Book", action="Nonexistent")

    def test_ls_hides_linked_goals(self, service: TaskService) -> None:
        service.add_action("Borrow Book")
        service.add_goal("Read Book", action="Borrow Book")
        service.add_goal("Learn Piano")
        assert list(service.list_goals()) == ["Learn Piano"]
        assert list(service.list_goals(include_linked=True)) == ["Read Book", "Learn Piano"]

    def test_remove(self, service: TaskService) -> None:
        service.add_goal("Read Book")
        service.remove_goal("Read Book")
        assert list(service.list_goals(include_linked=True)) == []

    def test_remove_missing(self, service: TaskService) -> None:
        service.add_goal("Keep")
        with pytest.raises(NotFoundError, match="no such goal: `Gone`"):
            service.remove_goal("Gone")
        assert list(service.list_goals(include_linked=True)) == ["Keep"]

    def test_rename(self, service: TaskService, store: SqliteStore) -> None:
        service.add_action("Borrow Book")
        service.add_goal("Read Book", action="Borrow Book")
        service.rename_goal("Read Book", "Finish Book")
        assert _goals(store) == [Goal(description="Finish Book", action="Borrow Book")]

    def test_rename_missing(self, service: TaskService) -> None:
        with pytest.raises(NotFoundError, match="no such goal: `Nope`"):
            service.rename_goal("Nope", "Other")

    def test_rename_onto_existing(self, service: TaskService) -> None:
        service.add_goal("A")
        service.add_goal("B")
        with pytest.raises(AlreadyExistsError, match="goal `B` already exists"):
            service.rename_goal("A", "B")

    def test_set_action(self, service: TaskService, store: SqliteStore) -> None:
        service.add_action("Borrow Book")
        service.add_goal("Read Book")
        service.set_goal_action("Read Book", "Borrow Book")
        assert _goals(store) == [Goal(description="Read Book", action="Borrow Book")]

    def test_set_action_missing_goal(self, service: TaskService) -> None:
        service.add_action("Borrow Book")
        with pytest.raises(NotFoundError, match="no such goal: `Read Book`"):
            service.set_goal_action("Read Book", "Borrow Book")

    def test_set_action_missing_action(self, service: TaskService, store: SqliteStore) -> None:
        service.add_goal("Read Book")
        with pytest.raises(DependencyError, match="no such action: `Borrow Book`"):
            service.set_goal_action("Read Book", "Borrow Book")
        assert _goals(store) == [Goal(description="Read Book", action=None)]

    def test_unset_action(self, service: TaskService, store: SqliteStore) -> None:
        service.add_action("Borrow Book")
        service.add_goal("Read Book", action="Borrow Book")
        service.unset_goal_action("Read Book")
        assert _goals(store) == [Goal(description="Read Book", action=None)]

    def test_unset_action_missing_goal(self, service: TaskService) -> None:
        with pytest.raises(NotFoundError, match="no such goal: `Read Book`"):
            service.unset_goal_action("Read Book")


# ---------------------------------------------------------------------------
# Cascades
# ---------------------------------------------------------------------------

class TestCascades:
    def test_removing_action_unlinks_goals(
        self, service: TaskService, store: SqliteStore,
    ) -> None:
        service.add_action("Borrow Book")
        service.add_goal("Read Book", action="Borrow Book")
        service.add_goal("Review Book", action="Borrow Book")
        service.remove_action("Borrow Book")
        assert _goals(store) == [
            Goal(description="Read Book", action=None),
            Goal(description="Review Book", action=None),
        ]
        assert list(service.list_goals()) == ["Read Book", "Review Book"]

    def test_renaming_action_relinks_goals(
        self, service: TaskService, store: SqliteStore,
    ) -> None:
        service.add_action("Borrow Book")
        service.add_action("Other")
        service.add_goal("Read Book", action="Borrow Book")
        service.add_goal("Unrelated", action="Other")
        service.rename_action("Borrow Book", "Buy Book")
        assert _goals(store) == [
            Goal(description="Read Book", action="Buy Book"),
            Goal(description="Unrelated", action="Other"),
        ]

    def test_failed_rename_leaves_links(self, service: TaskService, store: SqliteStore) -> None:
        service.add_action("A")
        service.add_action("B")
        service.add_goal("G", action="A")
        with pytest.raises(AlreadyExistsError):
            service.rename_action("A", "B")
        assert _goals(store) == [Goal(description="G", action="A")]


# ---------------------------------------------------------------------------
# Listing semantics
# ---------------------------------------------------------------------------

class TestDescriptions:
    def test_is_lazy(self) -> None:
        source = MagicMock(return_value=iter([]))
        listing = Descriptions(source)
        source.assert_not_called()
        assert list(listing) == []
        source.assert_called_once_with()

    def test_is_restartable(self, service: TaskService) -> None:
        listing = service.list_actions()
        service.add_action("One")
        assert list(listing) == ["One"]
        service.add_action("Two")
        assert list(listing) == ["One", "Two"]


# ---------------------------------------------------------------------------
# Row-count contract and boundary wrapping
# ---------------------------------------------------------------------------

class TestRowCountContract:
    def test_more_than_one_row_is_consistency_error(self) -> None:
        store = _mock_store()
        store.remove_goal.return_value = 2
        with pytest.raises(ConsistencyError, match="2 goals matched `G`"):
            TaskService(store).remove_goal("G")

    def test_consistency_error_rolls_back(
        self,
        service: TaskService,
        store: SqliteStore,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        service.add_action("Borrow Book")
        service.add_goal("Read Book", action="Borrow Book")
        real_remove = store.remove_action
        monkeypatch.setattr(store, "remove_action", lambda d: real_remove(d) + 1)

        with pytest.raises(ConsistencyError):
            service.remove_action("Borrow Book")

        assert list(service.list_actions()) == ["Borrow Book"]
        assert _goals(store) == [Goal(description="Read Book", action="Borrow Book")]

    def test_consistency_error_is_store_error(self) -> None:
        assert issubclass(ConsistencyError, StoreError)

    def test_unexpected_store_exception_is_wrapped(self) -> None:
        store = _mock_store()
        store.add_action.side_effect = RuntimeError("disk on fire")
        with pytest.raises(StoreError, match="unable to add action: disk on fire"):
            TaskService(store).add_action("X")

    def test_typed_errors_propagate_unchanged(self) -> None:
        store = _mock_store()
        original = NotFoundError("no such goal: `G`")
        store.remove_goal.side_effect = original
        with pytest.raises(NotFoundError) as exc_info:
            TaskService(store).remove_goal("G")
        assert exc_info.value is original


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

class TestRun:
    def test_mutations_return_none(self, service: TaskService) -> None:
        assert service.run(AddAction(description="A")) is None
        assert service.run(RenameAction(old_description="A", new_description="B")) is None
        assert service.run(AddGoal(description="G", action="B")) is None
        assert service.run(UnsetGoalAction(description="G")) is None
        assert service.run(SetGoalAction(description="G", action="B")) is None
        assert service.run(RenameGoal(old_description="G", new_description="H")) is None
        assert service.run(RemoveAction(description="B")) is None
        assert service.run(RemoveGoal(description="H")) is None

    def test_listings_return_descriptions(self, service: TaskService) -> None:
        service.run(AddAction(description="A"))
        service.run(AddGoal(description="G", action="A"))
        assert list(service.run(ListActions()) or []) == ["A"]
        assert list(service.run(ListGoals()) or []) == []
        assert list(service.run(ListGoals(include_linked=True)) or []) == ["G"]

    def test_unknown_command(self, service: TaskService) -> None:
        with pytest.raises(TypeError, match="unsupported command"):
            service.run(object())  # type: ignore[arg-type]
