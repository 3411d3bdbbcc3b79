"""Task definitions and the flattened task graph.

This module provides the immutable records the execution engine interprets:
activity and choice definitions referencing their successors by name, and the
:class:`TaskGraph` that holds them in order.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Union

from activity_workflows.core.types import THEN_LABEL, TaskType

if TYPE_CHECKING:
    from activity_workflows.core.types import Pointer, StepFunction

__all__ = [
    "ActivityDefinition",
    "CatchRoute",
    "ChoiceDefinition",
    "GraphEdge",
    "TaskDefinition",
    "TaskGraph",
]


@dataclass(frozen=True)
class CatchRoute:
    """Target of a catch entry.

    Attributes:
        then: Name of the task handling the failure, or ``None`` to end the workflow.
    """

    then: Pointer


@dataclass(frozen=True)
class ActivityDefinition:
    """A unit of work transitioning via ``then`` on success and ``catch`` on failure.

    Attributes:
        name: Unique name of the task within its graph.
        fn: Async step function called as ``fn(input, context)``.
        then: Name of the next task, or ``None`` to end the workflow.
        catch: Ordered mapping from catch pattern to :class:`CatchRoute`. ``None``
            when the activity declares no catch entries at all.
        start: Marks the entry point of the graph.

    Example:
        >>> definition = ActivityDefinition(
        ...     name="fetch",
        ...     fn=fetch_document,
        ...     then="parse",
        ...     catch={"*Timeout*": CatchRoute(then="notify")},
        ... )
    """

    name: str
    fn: StepFunction
    then: Pointer = None
    catch: Mapping[str, CatchRoute] | None = None
    start: bool = False
    task_type: TaskType = field(default=TaskType.ACTIVITY, init=False)

    def __post_init__(self) -> None:
        if self.catch is not None:
            object.__setattr__(self, "catch", MappingProxyType(dict(self.catch)))


@dataclass(frozen=True)
class ChoiceDefinition:
    """A branching point routing on the string form of its own output.

    A choice never transforms the payload: the selected branch receives the input
    the choice itself was given.

    Attributes:
        name: Unique name of the task within its graph.
        fn: Async step function whose result selects a branch.
        choices: Mapping from decision key to task name, or ``None`` to end.
        start: Marks the entry point of the graph.
    """

    name: str
    fn: StepFunction
    choices: Mapping[str, Pointer] = field(default_factory=dict)
    start: bool = False
    task_type: TaskType = field(default=TaskType.CHOICE, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "choices", MappingProxyType(dict(self.choices)))


TaskDefinition = Union[ActivityDefinition, ChoiceDefinition]
"""Tagged union of the task kinds, discriminated by ``task_type``."""


@dataclass(frozen=True)
class GraphEdge:
    """A labelled, directed connection between two tasks.

    Attributes:
        source: Name of the task the edge leaves.
        label: ``"then"``, a catch pattern, or a choice key.
        target: Name of the target task, or ``None`` for the end of the workflow.
        kind: ``"then"``, ``"catch"`` or ``"choice"``.
    """

    source: str
    label: str
    target: Pointer
    kind: str


class TaskGraph:
    """Immutable, ordered collection of uniquely named task definitions.

    Tasks are kept in the order given. When several definitions share a name the
    first one wins and later ones are discarded. Successor names are not checked
    here; the engine resolves them when it follows them.

    Example:
        >>> graph = TaskGraph([fetch, parse, notify])
        >>> graph.start_task.name
        'fetch'
        >>> graph.get("parse") is parse
        True
    """

    __slots__ = ("_order", "_tasks")

    def __init__(self, tasks: Iterable[TaskDefinition] = ()) -> None:
        """Initialize the graph from task definitions.

        Args:
            tasks: Task definitions in graph order.
        """
        by_name: dict[str, TaskDefinition] = {}
        for task in tasks:
            by_name.setdefault(task.name, task)
        self._tasks: Mapping[str, TaskDefinition] = MappingProxyType(by_name)
        self._order: tuple[TaskDefinition, ...] = tuple(by_name.values())

    @classmethod
    def from_tasks(cls, tasks: TaskGraph | Iterable[TaskDefinition]) -> TaskGraph:
        """Return ``tasks`` unchanged if it already is a graph, else build one.

        Args:
            tasks: A graph or an iterable of task definitions.

        Returns:
            A TaskGraph instance.
        """
        if isinstance(tasks, TaskGraph):
            return tasks
        return cls(tasks)

    def __iter__(self) -> Iterator[TaskDefinition]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __getitem__(self, index: int) -> TaskDefinition:
        return self._order[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaskGraph):
            return NotImplemented
        return self._order == other._order

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TaskGraph({[task.name for task in self._order]!r})"

    @property
    def names(self) -> list[str]:
        """Names of the tasks, in graph order."""
        return [task.name for task in self._order]

    @property
    def start_task(self) -> TaskDefinition | None:
        """The task flagged as start, otherwise the first task; ``None`` if empty."""
        for task in self._order:
            if task.start:
                return task
        return self._order[0] if self._order else None

    def get(self, name: str | None) -> TaskDefinition | None:
        """Look up a task by name.

        Args:
            name: The task name.

        Returns:
            The task definition, or None if no task has that name.
        """
        if name is None:
            return None
        return self._tasks.get(name)

    def edges(self) -> list[GraphEdge]:
        """List every outgoing edge of every task, in graph and declaration order.

        Returns:
            The graph edges.
        """
        edges: list[GraphEdge] = []
        for task in self._order:
            if task.task_type == TaskType.ACTIVITY:
                edges.append(GraphEdge(task.name, THEN_LABEL, task.then, "then"))
                for pattern, route in (task.catch or {}).items():
                    edges.append(GraphEdge(task.name, pattern, route.then, "catch"))
            else:
                for key, target in task.choices.items():
                    edges.append(GraphEdge(task.name, key, target, "choice"))
        return edges

    def validate(self) -> list[str]:
        """Check the graph for common wiring mistakes.

        The engine does not call this; dangling pointers only fail a run when it
        follows them. Use it as a lint step before deploying a workflow.

        Returns:
            List of problems found. Empty list if none.

        Example:
            >>> errors = graph.validate()
            >>> if errors:
            ...     print("Validation errors:", errors)
        """
        errors: list[str] = []

        if self.start_task is None:
            errors.append("Graph has no start task")
            return errors

        flagged = [task.name for task in self._order if task.start]
        if len(flagged) > 1:
            errors.append(f"Several tasks are flagged as start: {', '.join(flagged)}")

        for edge in self.edges():
            if edge.target is not None and edge.target not in self._tasks:
                errors.append(f"Task '{edge.source}' {edge.kind} '{edge.label}' points to unknown task '{edge.target}'")

        for task in self._order:
            if task.task_type == TaskType.CHOICE and not task.choices:
                errors.append(f"Choice '{task.name}' declares no choices")

        reachable = self._get_reachable_tasks()
        for task in self._order:
            if task.name not in reachable:
                errors.append(f"Task '{task.name}' is unreachable from start task")

        return errors

    def _get_reachable_tasks(self) -> set[str]:
        """Get all tasks reachable from the start task.

        Returns:
            Set of task names that can be reached.
        """
        start = self.start_task
        if start is None:
            return set()

        adjacency: dict[str, list[str]] = {}
        for edge in self.edges():
            if edge.target is not None:
                adjacency.setdefault(edge.source, []).append(edge.target)

        reachable: set[str] = set()
        to_visit = [start.name]
        while to_visit:
            current = to_visit.pop()
            if current in reachable or current not in self._tasks:
                continue
            reachable.add(current)
            to_visit.extend(adjacency.get(current, []))

        return reachable
