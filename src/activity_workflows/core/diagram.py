"""Graph visualization utilities for workflows.

This module renders a task graph as a MermaidJS flowchart, optionally
highlighting the path recorded in a :class:`~activity_workflows.core.models.WorkflowResult`,
and derives shareable mermaid.live / mermaid.ink URLs from it.
"""

from __future__ import annotations

import base64
import json
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from activity_workflows.core.definition import TaskGraph
from activity_workflows.core.types import TaskType

if TYPE_CHECKING:
    from activity_workflows.core.definition import GraphEdge, TaskDefinition
    from activity_workflows.core.models import WorkflowResult

__all__ = [
    "parse_graph_to_dict",
    "to_mermaid",
    "to_mermaid_live_edit_url",
    "to_mermaid_png_url",
]

START_NODE = "Start((start))"
END_NODE = "End((end))"
TRACED_CLASS = ":::traced"
TRACED_CLASS_DEF = "classDef traced fill:green,stroke-width:4px;"


def _task_id(name: str) -> str:
    return name.replace(" ", "_")


def _node(task: TaskDefinition, traced: bool) -> str:
    if task.task_type == TaskType.CHOICE:
        shape = f"{{{task.name}}}"
    else:
        shape = f"[{task.name}]"
    return f"{_task_id(task.name)}{shape}{TRACED_CLASS if traced else ''}"


def _traced_edges(result: WorkflowResult | None) -> set[tuple[str, str]]:
    """Collect ``(source, label)`` pairs of the edges the result traversed."""
    if result is None:
        return set()
    return {
        (transition.source.name, transition.edge)
        for transition in result.transitions
        if transition.source is not None and transition.edge is not None
    }


def _edge_line(edge: GraphEdge, task: TaskDefinition, traced_node: bool, traced: bool) -> str:
    arrow = "==>" if traced else "-->"
    label = f"catch {edge.label}" if edge.kind == "catch" else edge.label
    destination = _task_id(edge.target) if edge.target is not None else END_NODE
    return f"{_node(task, traced_node)}{arrow}|{label}|{destination}"


def to_mermaid(tasks: TaskGraph | Iterable[TaskDefinition], result: WorkflowResult | None = None) -> str:
    """Generate a MermaidJS flowchart of a task graph.

    Activities are drawn as rectangles and choices as rhombi. When a result is
    given, visited tasks and traversed edges are highlighted.

    Args:
        tasks: The graph to render.
        result: Optional execution result whose trace should be highlighted.

    Returns:
        MermaidJS flowchart definition as a string.

    Example:
        >>> print(to_mermaid(workflow.to_task_graph()))
        flowchart TD
            Start((start))-->fetch
            fetch[fetch]-->|then|parse
            parse[parse]-->|then|End((end))
    """
    graph = TaskGraph.from_tasks(tasks)
    visited = set(result.visited_tasks) if result is not None else set()
    traced_edges = _traced_edges(result)

    lines = ["flowchart TD"]

    start = graph.start_task
    if start is not None:
        start_arrow = f"{TRACED_CLASS}==>" if result is not None else "-->"
        lines.append(f"{START_NODE}{start_arrow}{_task_id(start.name)}")

    edges_by_task: dict[str, list[GraphEdge]] = {}
    for edge in graph.edges():
        edges_by_task.setdefault(edge.source, []).append(edge)

    for task in graph:
        traced_node = task.name in visited
        task_edges = edges_by_task.get(task.name, [])
        if not task_edges:
            lines.append(_node(task, traced_node))
        lines.extend(
            _edge_line(edge, task, traced_node, (task.name, edge.label) in traced_edges) for edge in task_edges
        )

    if result is not None and result.success:
        lines.append(f"{END_NODE}{TRACED_CLASS}")
    if result is not None:
        lines.append(TRACED_CLASS_DEF)

    return "\n    ".join(lines)


def _encode_live_state(mermaid_source: str, theme: str | None = None) -> str:
    state: dict[str, Any] = {"code": mermaid_source}
    if theme is not None:
        state["mermaid"] = json.dumps({"theme": theme}, separators=(",", ":"))
    state.update({"autoSync": True, "rough": False, "updateDiagram": True})
    encoded = base64.b64encode(json.dumps(state, separators=(",", ":")).encode()).decode()
    return f"base64:{encoded}"


def to_mermaid_live_edit_url(
    tasks: TaskGraph | Iterable[TaskDefinition],
    result: WorkflowResult | None = None,
) -> str:
    """Build a mermaid.live editor URL for the graph (dark theme).

    Args:
        tasks: The graph to render.
        result: Optional execution result whose trace should be highlighted.

    Returns:
        The editor URL.
    """
    state = _encode_live_state(to_mermaid(tasks, result), theme="dark")
    return f"https://mermaid.live/edit#{state}"


def to_mermaid_png_url(
    tasks: TaskGraph | Iterable[TaskDefinition],
    result: WorkflowResult | None = None,
) -> str:
    """Build a mermaid.ink URL rendering the graph as a PNG image.

    Args:
        tasks: The graph to render.
        result: Optional execution result whose trace should be highlighted.

    Returns:
        The image URL.
    """
    state = _encode_live_state(to_mermaid(tasks, result))
    return f"https://mermaid.ink/img/{state}?type=png"


def parse_graph_to_dict(tasks: TaskGraph | Iterable[TaskDefinition]) -> dict[str, Any]:
    """Parse a task graph into a dictionary representation.

    Args:
        tasks: The graph to parse.

    Returns:
        A dictionary containing ``nodes`` and ``edges`` lists.

    Example:
        >>> parse_graph_to_dict(graph)["nodes"][0]
        {'id': 'fetch', 'label': 'fetch', 'type': 'activity', 'is_start': True}
    """
    graph = TaskGraph.from_tasks(tasks)
    start = graph.start_task

    nodes = [
        {
            "id": _task_id(task.name),
            "label": task.name,
            "type": str(task.task_type),
            "is_start": start is not None and task.name == start.name,
        }
        for task in graph
    ]
    edges = [
        {
            "source": edge.source,
            "target": edge.target,
            "label": edge.label,
            "kind": edge.kind,
        }
        for edge in graph.edges()
    ]

    return {"nodes": nodes, "edges": edges}
