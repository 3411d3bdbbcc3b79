"""Workflow registry for managing named workflows.

This module provides a registry for storing, retrieving, and managing
workflows by name.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from activity_workflows.exceptions import WorkflowNotFoundError

if TYPE_CHECKING:
    from activity_workflows.workflow import Workflow

__all__ = ["WorkflowRegistry"]

logger = logging.getLogger(__name__)


class WorkflowRegistry:
    """Registry for storing and retrieving workflows.

    Attributes:
        _workflows: Map of workflow names to workflows, in registration order.
    """

    def __init__(self) -> None:
        """Initialize an empty workflow registry."""
        self._workflows: dict[str, Workflow] = {}

    def register(self, workflow: Workflow) -> None:
        """Register a workflow under its name.

        Registering another workflow with the same name replaces the previous one.

        Args:
            workflow: The workflow to register.

        Example:
            >>> registry = WorkflowRegistry()
            >>> registry.register(Workflow(fetch, name="ingest"))
        """
        if workflow.name in self._workflows:
            logger.debug("Replacing workflow '%s'", workflow.name)
        else:
            logger.debug("Registered workflow '%s'", workflow.name)
        self._workflows[workflow.name] = workflow

    def get_workflow(self, name: str) -> Workflow:
        """Retrieve a workflow by name.

        Args:
            name: The workflow name.

        Returns:
            The registered Workflow.

        Raises:
            WorkflowNotFoundError: If no workflow is registered under that name.

        Example:
            >>> workflow = registry.get_workflow("ingest")
        """
        if name not in self._workflows:
            raise WorkflowNotFoundError(name)
        return self._workflows[name]

    def list_workflows(self) -> list[Workflow]:
        """List all registered workflows in registration order.

        Returns:
            List of Workflow objects.
        """
        return list(self._workflows.values())

    def has_workflow(self, name: str) -> bool:
        """Check if a workflow exists in the registry.

        Args:
            name: The workflow name.

        Returns:
            True if the workflow exists, False otherwise.
        """
        return name in self._workflows

    def unregister(self, name: str) -> None:
        """Remove a workflow from the registry. Unknown names are ignored.

        Args:
            name: The workflow name.

        Example:
            >>> registry.unregister("old_workflow")
        """
        if self._workflows.pop(name, None) is not None:
            logger.debug("Unregistered workflow '%s'", name)
