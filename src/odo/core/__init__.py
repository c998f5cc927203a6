"""Core / service layer — command grammar and CRUD semantics.

Rules
-----
* No ``print()`` calls.
* No filesystem or database I/O of its own.
* No imports from ``cli`` or ``infra``.
"""

from odo.core.commands import Command
from odo.core.models import Action, Goal
from odo.core.parser import parse_command
from odo.core.protocols import TaskStore
from odo.core.task_service import Descriptions, TaskService

__all__: list[str] = [
    "Action",
    "Command",
    "Descriptions",
    "Goal",
    "TaskService",
    "TaskStore",
    "parse_command",
]
