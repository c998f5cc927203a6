"""CLI application entry point and command routing for odo.

This module is the **sole error boundary** for the entire application.
It catches :class:`~odo.exceptions.OdoError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, writing a single ``odo: <message>``
line to stderr and returning a well-defined exit code.

Architecture notes
------------------
* No business logic lives here — parsing and CRUD are delegated to the
  core layer, storage to the infrastructure layer.
* The command line is fully parsed before the store is opened, so a
  malformed command never touches the database.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from odo.cli import exit_codes
from odo.cli.console import report_error, write_lines
from odo.cli.log import configure_logging
from odo.config import Settings
from odo.core.parser import parse_command
from odo.core.task_service import TaskService
from odo.exceptions import OdoError
from odo.infra.sqlite_store import open_store
from odo.version import __version__

logger = logging.getLogger(__name__)

USAGE = """\
usage: odo action add <description...>
       odo action ls
       odo action rm <description...>
       odo action set description <old-description> <new-description...>
       odo goal add [--action <action-description>] <description...>
       odo goal ls [--all]
       odo goal rm <description...>
       odo goal set action <description> <new-action...>
       odo goal set description <old-description> <new-description...>
       odo goal unset action <description...>
       odo --help | --version"""

HELP_FLAGS: tuple[str, ...] = ("-h", "--help")
VERSION_FLAGS: tuple[str, ...] = ("-V", "--version")


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: Sequence[str] | None = None) -> int:
    """Run the odo CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.

    Raises
    ------
    OdoError
        For every user-facing failure; :func:`cli` renders it.
    """
    tokens = list(sys.argv[1:] if argv is None else argv)

    if tokens and tokens[0] in HELP_FLAGS:
        write_lines(USAGE.splitlines())
        return exit_codes.SUCCESS
    if tokens and tokens[0] in VERSION_FLAGS:
        write_lines([f"odo {__version__}"])
        return exit_codes.SUCCESS

    command = parse_command(tokens)

    settings = Settings.from_env()
    configure_logging(settings.log_level)

    with open_store(settings.data_dir, busy_timeout=settings.busy_timeout) as store:
        store.initialize_schema()
        output = TaskService(store).run(command)
        if output is not None:
            # Read everything first so a store error cannot leave half a listing.
            write_lines(list(output))

    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli(argv: Sequence[str] | None = None) -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main(argv)
        sys.exit(code)
    except OdoError as exc:
        report_error(str(exc))
        if exc.hint:
            logger.info("hint: %s", exc.hint)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        report_error("aborted by user")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        report_error(f"unexpected error: {type(exc).__name__}: {exc}")
        sys.exit(exit_codes.GENERAL_ERROR)
