"""Domain models for odo.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  Descriptions are identities: there is no
surrogate id, so two entities with equal descriptions are the same row.
"""

from __future__ import annotations

from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Action
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Action:
    """A discrete task the user can perform."""

    description: str
    """Non-empty text; unique among actions."""


# ---------------------------------------------------------------------------
# Goal
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Goal:
    """A desired outcome, optionally linked to the action that achieves it."""

    description: str
    """Non-empty text; unique among goals."""

    action: str | None = None
    """Description of the linked :class:`Action`, or ``None``."""
