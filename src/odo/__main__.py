"""Allow ``python -m odo`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m odo`` behaves identically to the ``odo`` console script.
"""

from __future__ import annotations

from odo.cli.app import cli

if __name__ == "__main__":
    cli()
