"""Workflow facade bundling a start task with running and rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from activity_workflows.core.diagram import to_mermaid, to_mermaid_live_edit_url, to_mermaid_png_url
from activity_workflows.engine.local import LocalExecutionEngine

if TYPE_CHECKING:
    from activity_workflows.core.definition import TaskGraph
    from activity_workflows.core.models import WorkflowResult
    from activity_workflows.core.types import Context
    from activity_workflows.steps.base import BaseTask

__all__ = ["Workflow"]


class Workflow:
    """A collection of tasks that can be run together.

    The workflow runs from its start task with an initial input and an optional
    initial context.

    Attributes:
        start_task: The builder the workflow starts from.
        name: Name used to register the workflow; defaults to the start task's name.
        description: Human-readable description of the workflow's purpose.

    Example:
        >>> fetch = Activity("fetch", fetch_document)
        >>> fetch.then(Activity("parse", parse_document))
        >>> workflow = Workflow(fetch, name="ingest")
        >>> result = await workflow.run({"url": "https://example.com/doc"})
        >>> result.output
        {'title': 'Example'}
    """

    def __init__(self, start_task: BaseTask, name: str | None = None, description: str = "") -> None:
        """Initialize the workflow.

        Args:
            start_task: The builder the workflow starts from.
            name: Optional workflow name.
            description: Human-readable description.
        """
        self.start_task = start_task
        self.name = name or start_task.name
        self.description = description

    def __repr__(self) -> str:
        return f"Workflow({self.name!r})"

    def to_task_graph(self) -> TaskGraph:
        """Flatten the reachable tasks into the graph the engine executes.

        Returns:
            The immutable task graph.
        """
        return self.start_task.to_task_graph()

    async def run(
        self,
        initial_input: Any = None,
        initial_context: Context | None = None,
        engine: LocalExecutionEngine | None = None,
    ) -> WorkflowResult:
        """Run the workflow.

        Args:
            initial_input: Payload handed to the start task.
            initial_context: Initial context values.
            engine: Engine to run on; a default one is used if omitted.

        Returns:
            The successful WorkflowResult.
        """
        engine = engine or LocalExecutionEngine()
        return await engine.run(self.to_task_graph(), initial_input, initial_context)

    def to_mermaid(self, result: WorkflowResult | None = None) -> str:
        """Convert the workflow to a Mermaid flowchart definition.

        Args:
            result: Optional result whose path should be highlighted.

        Returns:
            MermaidJS flowchart definition.
        """
        return to_mermaid(self.to_task_graph(), result)

    def to_png_url(self, result: WorkflowResult | None = None) -> str:
        """Convert the workflow to a PNG image URL.

        Args:
            result: Optional result whose path should be highlighted.

        Returns:
            The mermaid.ink image URL.
        """
        return to_mermaid_png_url(self.to_task_graph(), result)

    def to_live_edit_url(self, result: WorkflowResult | None = None) -> str:
        """Convert the workflow to a mermaid.live editor URL.

        Args:
            result: Optional result whose path should be highlighted.

        Returns:
            The mermaid.live URL.
        """
        return to_mermaid_live_edit_url(self.to_task_graph(), result)
