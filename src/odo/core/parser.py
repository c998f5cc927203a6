"""Command-line grammar: flat token list → typed :data:`Command`.

Every function in this module is a **pure** transformation — no I/O,
no store access, fully deterministic.

Grammar
-------
::

    action add <description...>
    action ls
    action rm <description...>
    action set description <old-description> <new-description...>
    goal add [--action <action-description>] <description...>
    goal ls [--all]
    goal rm <description...>
    goal set action <description> <new-action...>
    goal set description <old-description> <new-description...>
    goal unset action <description...>

Free text (``<x...>``) is every remaining token joined with single
spaces, so multi-word descriptions need no quoting.  Two-argument forms
take exactly one token for the identity argument and join the rest.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

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
from odo.exceptions import ParseError, quote

ACTION_FLAG = "--action"
ALL_FLAG = "--all"


# ---------------------------------------------------------------------------
# Token helpers
# ---------------------------------------------------------------------------

def _require(args: Iterator[str], what: str) -> str:
    """Consume exactly one token or fail with ``missing <what>``."""
    token = next(args, None)
    if token is None:
        raise ParseError(f"missing {what}")
    return token


def _rest(args: Iterator[str], what: str) -> str:
    """Join every remaining token with single spaces."""
    text = " ".join(args)
    if not text:
        raise ParseError(f"missing {what}")
    return text


def _no_more(args: Iterator[str]) -> None:
    extra = next(args, None)
    if extra is not None:
        raise ParseError(f"extra argument: {quote(extra)}")


# ---------------------------------------------------------------------------
# action ...
# ---------------------------------------------------------------------------

def _parse_action(args: Iterator[str]) -> Command:
    subsubcommand = _require(args, "subsubcommand")
    if subsubcommand == "add":
        return AddAction(description=_rest(args, "description"))
    if subsubcommand == "ls":
        _no_more(args)
        return ListActions()
    if subsubcommand == "rm":
        return RemoveAction(description=_rest(args, "description"))
    if subsubcommand == "set":
        field = _require(args, "field")
        if field == "description":
            old = _require(args, "description")
            return RenameAction(
                old_description=old,
                new_description=_rest(args, "new description"),
            )
        raise ParseError(f"no such field: {quote(field)}")
    raise ParseError(f"no such subsubcommand: {quote(subsubcommand)}")


# ---------------------------------------------------------------------------
# goal ...
# ---------------------------------------------------------------------------

def _parse_goal_add(args: Iterator[str]) -> AddGoal:
    """Handle the leading ``--action <value>`` flag, then the description."""
    remaining = list(args)
    action: str | None = None
    if remaining and remaining[0] == ACTION_FLAG:
        if len(remaining) < 2:
            raise ParseError(f"{ACTION_FLAG} requires an argument")
        action = remaining[1]
        remaining = remaining[2:]
    return AddGoal(description=_rest(iter(remaining), "description"), action=action)


def _parse_goal_ls(args: Iterator[str]) -> ListGoals:
    include_linked = False
    for token in args:
        if token != ALL_FLAG:
            raise ParseError(f"extra argument: {quote(token)}")
        include_linked = True
    return ListGoals(include_linked=include_linked)


def _parse_goal(args: Iterator[str]) -> Command:
    subsubcommand = _require(args, "subsubcommand")
    if subsubcommand == "add":
        return _parse_goal_add(args)
    if subsubcommand == "ls":
        return _parse_goal_ls(args)
    if subsubcommand == "rm":
        return RemoveGoal(description=_rest(args, "description"))
    if subsubcommand == "set":
        field = _require(args, "field")
        if field == "action":
            description = _require(args, "description")
            return SetGoalAction(description=description, action=_rest(args, "action"))
        if field == "description":
            old = _require(args, "description")
            return RenameGoal(
                old_description=old,
                new_description=_rest(args, "new description"),
            )
        raise ParseError(f"no such field: {quote(field)}")
    if subsubcommand == "unset":
        field = _require(args, "field")
        if field == "action":
            return UnsetGoalAction(description=_rest(args, "description"))
        raise ParseError(f"no such field: {quote(field)}")
    raise ParseError(f"no such subsubcommand: {quote(subsubcommand)}")


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def parse_command(tokens: Sequence[str]) -> Command:
    """Translate *tokens* (``argv`` without the program name) into a command.

    Raises
    ------
    ParseError
        With a message naming the missing or offending token.
    """
    args = iter(tokens)
    subcommand = _require(args, "subcommand")
    if subcommand == "action":
        return _parse_action(args)
    if subcommand == "goal":
        return _parse_goal(args)
    raise ParseError(f"no such subcommand: {quote(subcommand)}")
