"""Rich console helpers for the CLI layer.

Consoles are created per call so they always write to the current
``sys.stdout`` / ``sys.stderr``.  Descriptions are user text and must
round-trip byte for byte, so lines are written straight to the console's
file instead of through Rich's renderer (which expands tabs and strips
control characters).
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console

PROGRAM_NAME = "odo"


def get_rich_console(*, stderr: bool = False) -> Console:
    """Create a plain-text Rich console targeting stdout or stderr."""
    return Console(
        stderr=stderr,
        markup=False,
        emoji=False,
        highlight=False,
        soft_wrap=True,
    )


def _write_raw(console: Console, text: str) -> None:
    file = console.file
    file.write(f"{text}\n")
    file.flush()


def write_lines(lines: Iterable[str]) -> None:
    """Write each line, newline-terminated, to stdout."""
    console = get_rich_console()
    for line in lines:
        _write_raw(console, line)


def report_error(message: str) -> None:
    """Write the single ``odo: <message>`` error line to stderr."""
    _write_raw(get_rich_console(stderr=True), f"{PROGRAM_NAME}: {message}")
