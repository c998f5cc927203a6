"""Custom exception hierarchy for odo.

All exceptions that cross layer boundaries must inherit from
:class:`OdoError`.  Raw ``sqlite3`` exceptions must NEVER propagate
beyond the infrastructure layer — they must be caught and re-raised as a
typed subclass defined here.

Hierarchy
---------
OdoError
├── ParseError
├── NotFoundError
├── AlreadyExistsError
├── DependencyError
├── StoreError
│   └── ConsistencyError
├── EnvironmentError
└── ConfigError
"""

from __future__ import annotations


class OdoError(Exception):
    """Base exception for all odo errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a single
    ``odo: <message>`` line without leaking a stack trace.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance, logged at INFO level by the CLI."""


# --- Command line ----------------------------------------------------------

class ParseError(OdoError):
    """Raised when the command line is malformed or incomplete."""


# --- Entity state ----------------------------------------------------------

class NotFoundError(OdoError):
    """Raised when a mutation targets a row that does not exist."""


class AlreadyExistsError(OdoError):
    """Raised when a description collides with an existing row."""


class DependencyError(OdoError):
    """Raised when a goal references an action that does not exist."""


# --- Store -----------------------------------------------------------------

class StoreError(OdoError):
    """Raised for I/O, corruption, or locking failures in the store."""


class ConsistencyError(StoreError):
    """Raised when a single-row mutation touches more than one row."""


# --- Environment / configuration -------------------------------------------

class EnvironmentError(OdoError):
    """Raised when the data directory or database cannot be reached."""


class ConfigError(OdoError):
    """Raised when an ``ODO_*`` environment setting is invalid."""


def quote(text: str) -> str:
    """Wrap *text* in backticks the way every odo message names a value."""
    return f"`{text}`"
