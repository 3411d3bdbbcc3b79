"""REST API controller for workflow management.

This module provides the WorkflowController exposing registered workflows: their
task definitions, graph visualizations, and on-demand runs.
"""

from __future__ import annotations

from typing import ClassVar

from litestar import Controller, get, post
from litestar.exceptions import NotFoundException, ValidationException
from litestar.params import Parameter
from litestar.status_codes import HTTP_200_OK

from activity_workflows.core.diagram import (
    parse_graph_to_dict,
    to_mermaid,
    to_mermaid_live_edit_url,
    to_mermaid_png_url,
)
from activity_workflows.engine.local import LocalExecutionEngine  # noqa: TC001 - needed for DI
from activity_workflows.engine.registry import WorkflowRegistry  # noqa: TC001 - needed for DI
from activity_workflows.exceptions import WorkflowNotFoundError
from activity_workflows.web.dto import (
    GraphDTO,
    RunWorkflowDTO,
    WorkflowDetailDTO,
    WorkflowResultDTO,
    WorkflowSummaryDTO,
)
from activity_workflows.workflow import Workflow  # noqa: TC001

__all__ = ["WorkflowController"]


def _get_workflow(registry: WorkflowRegistry, name: str) -> Workflow:
    try:
        return registry.get_workflow(name)
    except WorkflowNotFoundError as e:
        raise NotFoundException(detail=f"Workflow '{name}' not found") from e


class WorkflowController(Controller):
    """API controller for registered workflows.

    Provides endpoints for listing workflows, inspecting their task definitions,
    rendering their graphs and running them.

    Tags: Workflows
    """

    path = "/"
    tags: ClassVar[list[str]] = ["Workflows"]

    @get("/")
    async def list_workflows(self, workflow_registry: WorkflowRegistry) -> list[WorkflowSummaryDTO]:
        """List all registered workflows.

        Args:
            workflow_registry: Injected workflow registry.

        Returns:
            List of workflow summary DTOs.
        """
        result = []
        for workflow in workflow_registry.list_workflows():
            graph = workflow.to_task_graph()
            start = graph.start_task
            result.append(
                WorkflowSummaryDTO(
                    name=workflow.name,
                    description=workflow.description,
                    start_task=start.name if start is not None else None,
                    tasks=graph.names,
                )
            )
        return result

    @get("/{name:str}")
    async def get_workflow(self, name: str, workflow_registry: WorkflowRegistry) -> WorkflowDetailDTO:
        """Get a workflow's task definitions.

        Args:
            name: The workflow name.
            workflow_registry: Injected workflow registry.

        Returns:
            Workflow detail DTO.

        Raises:
            NotFoundException: If the workflow is not registered.
        """
        return WorkflowDetailDTO.from_workflow(_get_workflow(workflow_registry, name))

    @get("/{name:str}/graph")
    async def get_workflow_graph(
        self,
        name: str,
        workflow_registry: WorkflowRegistry,
        graph_format: str = Parameter(
            default="mermaid",
            description="Graph format: 'mermaid' or 'json'",
        ),
    ) -> GraphDTO:
        """Get workflow graph visualization.

        Returns a visual representation of the workflow graph, either as
        MermaidJS source with image URLs or as a structured JSON object.

        Args:
            name: The workflow name.
            workflow_registry: Injected workflow registry.
            graph_format: Graph format ('mermaid' or 'json').

        Returns:
            Graph DTO with visualization data.

        Raises:
            NotFoundException: If the workflow is not registered.
            ValidationException: If the graph format is unknown.
        """
        graph = _get_workflow(workflow_registry, name).to_task_graph()
        graph_dict = parse_graph_to_dict(graph)

        if graph_format == "mermaid":
            return GraphDTO(
                mermaid_source=to_mermaid(graph),
                nodes=graph_dict["nodes"],
                edges=graph_dict["edges"],
                png_url=to_mermaid_png_url(graph),
                live_edit_url=to_mermaid_live_edit_url(graph),
            )
        if graph_format == "json":
            return GraphDTO(mermaid_source="", nodes=graph_dict["nodes"], edges=graph_dict["edges"])

        raise ValidationException(detail=f"Unknown graph format '{graph_format}'. Use 'mermaid' or 'json'.")

    @post("/{name:str}/run", status_code=HTTP_200_OK)
    async def run_workflow(
        self,
        name: str,
        data: RunWorkflowDTO,
        workflow_registry: WorkflowRegistry,
        workflow_engine: LocalExecutionEngine,
    ) -> WorkflowResultDTO:
        """Run a workflow to completion and return its result.

        Engine failures propagate to the registered exception handler, which
        answers 422 with the partial trace.

        Args:
            name: The workflow name.
            data: Initial input and context.
            workflow_registry: Injected workflow registry.
            workflow_engine: Injected execution engine.

        Returns:
            The serialized workflow result.

        Raises:
            NotFoundException: If the workflow is not registered.
        """
        workflow = _get_workflow(workflow_registry, name)
        result = await workflow.run(data.input, data.context, engine=workflow_engine)
        return WorkflowResultDTO.from_result(result)
