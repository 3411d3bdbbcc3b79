"""Base builder implementation for activity-workflows tasks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from activity_workflows.core.definition import TaskGraph

if TYPE_CHECKING:
    from activity_workflows.core.definition import TaskDefinition
    from activity_workflows.core.types import StepFunction, TaskType


class BaseTask(ABC):
    """Base implementation with common functionality for all task builders.

    Builders are the mutable half of a two-phase construction: they may reference
    each other in any order, including cycles, and are frozen into an immutable
    :class:`~activity_workflows.core.definition.TaskGraph` by :meth:`to_task_graph`.
    """

    name: str
    """Unique identifier for the task."""

    fn: StepFunction
    """Async step function called as ``fn(input, context)``."""

    task_type: TaskType
    """Kind of task (ACTIVITY or CHOICE)."""

    def __init__(self, name: str, fn: StepFunction, *, start: bool = False) -> None:
        """Initialize the base task.

        Args:
            name: Unique identifier for the task.
            fn: Async step function.
            start: Mark this task as the entry point even if it is not flattened first.
        """
        self.name = name
        self.fn = fn
        self.start = start

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    @abstractmethod
    def to_definition(self) -> TaskDefinition:
        """Freeze this task alone into its immutable definition.

        Returns:
            The task definition, with successors referenced by name.
        """

    @abstractmethod
    def successors(self) -> list[BaseTask]:
        """List the builders this task links to, in flattening order.

        Returns:
            Successor builders; End Pointers are omitted.
        """

    def to_task_graph(self) -> TaskGraph:
        """Flatten this task and everything reachable from it.

        The walk is pre-order: this task, then its first successor's closure, then
        the next successor's, and so on. Each builder is visited once, so cycles
        terminate; definitions sharing a name are deduplicated, first one wins.

        Returns:
            The immutable task graph, starting with this task.

        Example:
            >>> fetch = Activity("fetch", fetch_fn)
            >>> fetch.then(Activity("parse", parse_fn))
            >>> fetch.to_task_graph().names
            ['fetch', 'parse']
        """
        definitions: list[TaskDefinition] = []
        visited: set[int] = set()
        to_visit: list[BaseTask] = [self]

        while to_visit:
            current = to_visit.pop()
            if id(current) in visited:
                continue
            visited.add(id(current))
            definitions.append(current.to_definition())
            to_visit.extend(reversed(current.successors()))

        return TaskGraph(definitions)
