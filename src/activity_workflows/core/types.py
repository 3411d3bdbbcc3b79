"""Core type definitions for activity-workflows.

This module defines the fundamental types, enums, sentinels and type aliases used
throughout the workflow system.
"""

from __future__ import annotations

import sys
from collections.abc import Awaitable, Callable
from enum import Enum, auto
from typing import Any, TypeAlias

# StrEnum backport for Python < 3.11
if sys.version_info >= (3, 11):
    from enum import StrEnum
else:

    class StrEnum(str, Enum):
        """String enumeration compatibility for Python < 3.11."""

        def __str__(self) -> str:
            return str(self.value)

        @staticmethod
        def _generate_next_value_(name: str, start: int, count: int, last_values: list[Any]) -> str:
            return name.lower()


__all__ = [
    "END",
    "END_LABEL",
    "START_LABEL",
    "THEN_LABEL",
    "Context",
    "Pointer",
    "StepFunction",
    "TaskType",
]


class TaskType(StrEnum):
    """Discriminator of the task definitions in a workflow graph.

    Attributes:
        ACTIVITY: Performs work and transitions via ``then`` / ``catch``.
        CHOICE: Routes to a named branch based on its own output.
    """

    ACTIVITY = auto()
    CHOICE = auto()


END = None
"""The End Pointer: marks termination wherever a successor name is expected."""

START_LABEL = "(start)"
"""Transition label of the entry transition into the start task."""

END_LABEL = "(end)"
"""Transition label of the terminal transition."""

THEN_LABEL = "then"
"""Transition label of an activity's success edge."""

# Type aliases for workflow data
Context: TypeAlias = dict[str, Any]
"""Type alias for the execution context shared by every step of one run."""

Pointer: TypeAlias = str | None
"""A successor reference: a task name, or ``None`` for the End Pointer."""

StepFunction: TypeAlias = Callable[[Any, Context], Awaitable[Any]]
"""Async callable invoked as ``fn(input, context)`` for every task."""
