"""odo — track actions and the goals they achieve.

A small command-line task tracker backed by a local SQLite store with a
strict layered architecture.
"""

from odo.version import __version__

__all__: list[str] = ["__version__"]
