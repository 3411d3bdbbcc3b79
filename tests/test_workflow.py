"""Tests for the Workflow facade."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from activity_workflows import Activity, LocalExecutionEngine, Workflow

if TYPE_CHECKING:
    from tests.conftest import MockEventBus


async def identity(input: Any, context: dict[str, Any]) -> Any:
    return input


@pytest.mark.unit
class TestWorkflow:
    """Tests for Workflow construction."""

    def test_name_defaults_to_start_task(self) -> None:
        """Test the workflow takes its start task's name by default."""
        workflow = Workflow(Activity("fetch", identity))

        assert workflow.name == "fetch"
        assert workflow.description == ""
        assert repr(workflow) == "Workflow('fetch')"

    def test_explicit_name(self, linear_workflow: Workflow) -> None:
        """Test an explicit name and description."""
        assert linear_workflow.name == "linear"
        assert linear_workflow.description == "Three identity steps"

    def test_task_graph_follows_builders(self, linear_workflow: Workflow) -> None:
        """Test the graph is rebuilt from the current builders."""
        assert linear_workflow.to_task_graph().names == ["A", "B", "C"]

        linear_workflow.start_task.catch("*", Activity("D", identity))  # type: ignore[attr-defined]

        assert linear_workflow.to_task_graph().names == ["A", "B", "C", "D"]


@pytest.mark.unit
@pytest.mark.asyncio
class TestWorkflowRun:
    """Tests for running a Workflow."""

    async def test_run_with_default_engine(self, linear_workflow: Workflow) -> None:
        """Test running without an explicit engine."""
        result = await linear_workflow.run("x", {"tenant": "acme"})

        assert result.success is True
        assert result.output == "x"
        assert result.context == {"tenant": "acme"}

    async def test_run_with_engine(self, linear_workflow: Workflow, mock_event_bus: MockEventBus) -> None:
        """Test running on a given engine."""
        engine = LocalExecutionEngine(event_bus=mock_event_bus)

        await linear_workflow.run("x", engine=engine)

        assert mock_event_bus.event_types[0] == "workflow.started"
        assert mock_event_bus.event_types[-1] == "workflow.completed"
