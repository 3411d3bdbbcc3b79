"""Tests for the WorkflowRegistry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from activity_workflows.exceptions import WorkflowNotFoundError

if TYPE_CHECKING:
    from activity_workflows.engine.registry import WorkflowRegistry
    from activity_workflows.workflow import Workflow


@pytest.mark.unit
class TestWorkflowRegistry:
    """Tests for WorkflowRegistry."""

    def test_register_and_get(self, workflow_registry: WorkflowRegistry, linear_workflow: Workflow) -> None:
        """Test registering and retrieving a workflow by name."""
        workflow_registry.register(linear_workflow)

        assert workflow_registry.get_workflow("linear") is linear_workflow
        assert workflow_registry.has_workflow("linear")

    def test_get_unknown(self, workflow_registry: WorkflowRegistry) -> None:
        """Test retrieving an unknown workflow raises."""
        with pytest.raises(WorkflowNotFoundError, match="'missing'"):
            workflow_registry.get_workflow("missing")

        assert not workflow_registry.has_workflow("missing")

    def test_list_in_registration_order(
        self,
        workflow_registry: WorkflowRegistry,
        linear_workflow: Workflow,
        document_workflow: Workflow,
    ) -> None:
        """Test listing keeps registration order."""
        workflow_registry.register(document_workflow)
        workflow_registry.register(linear_workflow)

        assert [w.name for w in workflow_registry.list_workflows()] == ["ingest", "linear"]

    def test_register_replaces_same_name(self, workflow_registry: WorkflowRegistry, linear_workflow: Workflow) -> None:
        """Test registering a second workflow with the same name replaces the first."""
        from activity_workflows.workflow import Workflow

        replacement = Workflow(linear_workflow.start_task, name="linear", description="v2")
        workflow_registry.register(linear_workflow)
        workflow_registry.register(replacement)

        assert workflow_registry.get_workflow("linear") is replacement
        assert len(workflow_registry.list_workflows()) == 1

    def test_unregister(self, workflow_registry: WorkflowRegistry, linear_workflow: Workflow) -> None:
        """Test removing a workflow, and ignoring unknown names."""
        workflow_registry.register(linear_workflow)

        workflow_registry.unregister("linear")
        workflow_registry.unregister("missing")

        assert workflow_registry.list_workflows() == []

    def test_register_logs_every_workflow(
        self,
        workflow_registry: WorkflowRegistry,
        linear_workflow: Workflow,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test new and replacing registrations are both logged at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger="activity_workflows.engine.registry"):
            workflow_registry.register(linear_workflow)
            workflow_registry.register(linear_workflow)

        assert [record.getMessage() for record in caplog.records] == [
            "Registered workflow 'linear'",
            "Replacing workflow 'linear'",
        ]
        assert {record.levelno for record in caplog.records} == {logging.DEBUG}
