"""Data Transfer Objects for the workflow web API.

This module defines DTOs for serializing and deserializing workflow data
in REST API requests and responses.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from activity_workflows.core.matcher import describe_error
from activity_workflows.core.models import CaughtError
from activity_workflows.core.types import TaskType

if TYPE_CHECKING:
    from activity_workflows.core.definition import TaskDefinition
    from activity_workflows.core.models import Transition, WorkflowResult
    from activity_workflows.workflow import Workflow

__all__ = [
    "GraphDTO",
    "RunWorkflowDTO",
    "TaskDTO",
    "TransitionDTO",
    "WorkflowDetailDTO",
    "WorkflowResultDTO",
    "WorkflowSummaryDTO",
    "to_jsonable",
]


@dataclass
class RunWorkflowDTO:
    """DTO for running a workflow.

    Attributes:
        input: Payload handed to the start task.
        context: Initial context values.
    """

    input: Any = None
    context: dict[str, Any] | None = None


@dataclass
class WorkflowSummaryDTO:
    """DTO for workflow listing.

    Attributes:
        name: Workflow name.
        description: Human-readable description.
        start_task: Name of the task the workflow starts from.
        tasks: Names of all reachable tasks, in graph order.
    """

    name: str
    description: str
    start_task: str | None
    tasks: list[str]


@dataclass
class TaskDTO:
    """DTO for one task definition.

    Attributes:
        name: Task name.
        type: ``activity`` or ``choice``.
        start: Whether the task is the workflow's entry point.
        then: Success pointer of an activity (None means end).
        catch: Catch pattern to pointer mapping of an activity, if any.
        choices: Decision key to pointer mapping of a choice.
    """

    name: str
    type: str
    start: bool
    then: str | None = None
    catch: dict[str, str | None] | None = None
    choices: dict[str, str | None] | None = None

    @classmethod
    def from_definition(cls, task: TaskDefinition, start: bool) -> TaskDTO:
        if task.task_type == TaskType.CHOICE:
            return cls(name=task.name, type=str(task.task_type), start=start, choices=dict(task.choices))
        catch = None
        if task.catch is not None:
            catch = {pattern: route.then for pattern, route in task.catch.items()}
        return cls(name=task.name, type=str(task.task_type), start=start, then=task.then, catch=catch)


@dataclass
class WorkflowDetailDTO:
    """DTO for a workflow with its task definitions.

    Attributes:
        name: Workflow name.
        description: Human-readable description.
        tasks: The task definitions, in graph order.
    """

    name: str
    description: str
    tasks: list[TaskDTO]

    @classmethod
    def from_workflow(cls, workflow: Workflow) -> WorkflowDetailDTO:
        graph = workflow.to_task_graph()
        start = graph.start_task
        return cls(
            name=workflow.name,
            description=workflow.description,
            tasks=[TaskDTO.from_definition(task, start is not None and task.name == start.name) for task in graph],
        )


@dataclass
class GraphDTO:
    """DTO for workflow graph visualization.

    Attributes:
        mermaid_source: MermaidJS flowchart source (empty for the json format).
        nodes: Graph nodes.
        edges: Graph edges.
        png_url: mermaid.ink image URL.
        live_edit_url: mermaid.live editor URL.
    """

    mermaid_source: str
    nodes: list[dict[str, Any]]
    edges: list[dict[str, Any]]
    png_url: str | None = None
    live_edit_url: str | None = None


@dataclass
class TransitionDTO:
    """DTO for one recorded transition.

    Attributes:
        label: Transition label.
        source: Source task name (None at start).
        destination: Destination task name (None at end).
        payload: JSON-compatible form of the carried payload.
        edge: Graph edge followed (None at start).
    """

    label: str
    source: str | None
    destination: str | None
    payload: Any = None
    edge: str | None = None

    @classmethod
    def from_transition(cls, transition: Transition) -> TransitionDTO:
        return cls(
            label=transition.label,
            source=transition.source_name,
            destination=transition.destination_name,
            payload=to_jsonable(transition.payload),
            edge=transition.edge,
        )


@dataclass
class WorkflowResultDTO:
    """DTO for the result of a workflow run.

    Attributes:
        success: Whether the run reached the end of the workflow.
        transitions: Execution trace.
        output: JSON-compatible form of the final output.
        context: JSON-compatible form of the final context.
    """

    success: bool
    transitions: list[TransitionDTO]
    output: Any = None
    context: dict[str, Any] | None = None

    @classmethod
    def from_result(cls, result: WorkflowResult) -> WorkflowResultDTO:
        return cls(
            success=result.success,
            transitions=[TransitionDTO.from_transition(t) for t in result.transitions],
            output=to_jsonable(result.output),
            context=to_jsonable(result.context),
        )


def to_jsonable(value: Any) -> Any:
    """Convert a payload into JSON-compatible data.

    Caught errors become ``{"key": ..., "error": ...}`` and exceptions their
    qualified description; unknown objects fall back to ``str()``.

    Args:
        value: Any payload, output or context value.

    Returns:
        A value built only from dicts, lists, strings, numbers, booleans and None.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, CaughtError):
        return {"key": value.key, "error": to_jsonable(value.error)}
    if isinstance(value, BaseException):
        return describe_error(value)[-1]
    if isinstance(value, Mapping):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(item) for item in value]
    return str(value)
