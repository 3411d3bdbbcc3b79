"""Concrete data models for activity-workflows.

This module provides the dataclasses describing what happened during one workflow
execution: the transitions taken and the final result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from activity_workflows.core.definition import TaskDefinition


__all__ = ["CaughtError", "Transition", "WorkflowResult"]


@dataclass(frozen=True)
class CaughtError:
    """Payload handed to the task a catch entry routes to.

    Attributes:
        key: The catch pattern that matched.
        error: The original failure, an exception or the value passed to ``Failure``.

    Example:
        >>> async def notify(input: CaughtError, context):
        ...     if input.key == "*Timeout*":
        ...         return "retry later"
        ...     raise input.error
    """

    key: str
    error: Any


@dataclass(frozen=True)
class Transition:
    """Immutable record of one step of an execution trace.

    Attributes:
        label: ``"(start)"``, ``"then"``, a catch pattern, a choice key, or ``"(end)"``.
        source: Task the transition leaves; ``None`` for the start transition.
        destination: Task the transition enters; ``None`` for the end transition.
        payload: The value carried to the destination (or the final output).
        edge: Label of the graph edge followed: ``"then"``, a catch pattern or a
            choice key. For the ``"(end)"`` transition this is the edge that led
            to the end; ``None`` for the start transition.
    """

    label: str
    source: TaskDefinition | None
    destination: TaskDefinition | None
    payload: Any = None
    edge: str | None = None

    @property
    def source_name(self) -> str | None:
        """Name of the source task, if any."""
        return self.source.name if self.source is not None else None

    @property
    def destination_name(self) -> str | None:
        """Name of the destination task, if any."""
        return self.destination.name if self.destination is not None else None


@dataclass
class WorkflowResult:
    """Outcome of one workflow execution.

    Returned by the engine on success, and attached to the raised error on failure
    with ``success=False`` and the trace up to the failing task.

    Attributes:
        success: Whether the execution reached the end of the workflow.
        transitions: Ordered execution trace.
        output: The final output, or the offending value on failure.
        context: The execution context as left by the last step.
    """

    success: bool
    transitions: list[Transition] = field(default_factory=list)
    output: Any = None
    context: dict[str, Any] = field(default_factory=dict)

    @property
    def visited_tasks(self) -> list[str]:
        """Names of the tasks entered, in order, including repeated visits."""
        return [t.destination.name for t in self.transitions if t.destination is not None]

    @property
    def last_task(self) -> str | None:
        """Name of the last task entered, or None if no task was entered."""
        visited = self.visited_tasks
        return visited[-1] if visited else None
