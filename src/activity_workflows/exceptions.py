"""Exception hierarchy for activity-workflows."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from activity_workflows.core.definition import TaskGraph
    from activity_workflows.core.models import WorkflowResult

__all__ = (
    "StartTaskNotFoundError",
    "StepExecutionError",
    "TaskNotFoundError",
    "UnmappedChoiceError",
    "WorkflowExecutionError",
    "WorkflowNotFoundError",
    "WorkflowStructureError",
    "WorkflowsError",
)


class WorkflowsError(Exception):
    """Base exception for all activity-workflows errors.

    All exceptions raised by activity-workflows should inherit from this class.
    This allows users to catch all workflow-related errors with a single except clause.
    """


class WorkflowNotFoundError(WorkflowsError):
    """Raised when a workflow is not found in the registry.

    Attributes:
        name: The name of the workflow that was not found.
    """

    def __init__(self, name: str) -> None:
        """Initialize the exception with workflow details.

        Args:
            name: The name of the workflow that was not found.
        """
        self.name = name
        super().__init__(f"Workflow '{name}' not found")


class WorkflowExecutionError(WorkflowsError):
    """Raised by the execution engine when a run cannot complete.

    The partial result is attached so the caller can inspect or render the path
    taken up to the failure.

    Attributes:
        result: The partial result, with ``success=False``, or None if not attached.
        tasks: The graph that was being executed, or None if not attached.
    """

    def __init__(
        self,
        message: str,
        result: WorkflowResult | None = None,
        tasks: TaskGraph | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable description of the failure.
            result: The partial workflow result.
            tasks: The graph that was being executed.
        """
        self.result = result
        self.tasks = tasks
        super().__init__(message)

    @property
    def original_error(self) -> Any:
        """The failure that caused this error, if it wraps one."""
        return None

    def to_dict(self) -> dict[str, Any]:
        """Describe the error and its trace as JSON-compatible data.

        Returns:
            Dictionary with the message, error type, original error and trace.
        """
        original = self.original_error
        trace = []
        if self.result is not None:
            trace = [
                {
                    "label": transition.label,
                    "source": transition.source_name,
                    "destination": transition.destination_name,
                }
                for transition in self.result.transitions
            ]
        return {
            "message": str(self),
            "error_type": type(self).__name__,
            "original_error": None if original is None else str(original),
            "trace": trace,
        }

    def to_json(self) -> str:
        """Serialize :meth:`to_dict` to a JSON string.

        Returns:
            The JSON document.
        """
        return json.dumps(self.to_dict())

    def to_diagram_png_url(self) -> str | None:
        """Build a PNG diagram URL highlighting the path taken before the failure.

        Returns:
            The mermaid.ink URL, or None if the graph or result is not attached.
        """
        if self.tasks is None or self.result is None:
            return None

        from activity_workflows.core.diagram import to_mermaid_png_url

        return to_mermaid_png_url(self.tasks, self.result)


class WorkflowStructureError(WorkflowExecutionError):
    """Raised when the graph itself is misconfigured.

    Structural errors are always fatal: a workflow's own catch entries never
    intercept them.
    """


class StartTaskNotFoundError(WorkflowStructureError):
    """Raised when the graph has no task to start from."""

    def __init__(self, result: WorkflowResult | None = None, tasks: TaskGraph | None = None) -> None:
        """Initialize the exception.

        Args:
            result: The (empty) partial workflow result.
            tasks: The graph that was being executed.
        """
        super().__init__("No start task found", result, tasks)


class TaskNotFoundError(WorkflowStructureError):
    """Raised when a ``then``, catch or choice pointer names an unknown task.

    Attributes:
        task_name: The name that could not be resolved.
    """

    def __init__(
        self,
        task_name: str,
        result: WorkflowResult | None = None,
        tasks: TaskGraph | None = None,
    ) -> None:
        """Initialize the exception with the dangling pointer.

        Args:
            task_name: The name that could not be resolved.
            result: The partial workflow result.
            tasks: The graph that was being executed.
        """
        self.task_name = task_name
        super().__init__(f"Task with name '{task_name}' not found", result, tasks)


class UnmappedChoiceError(WorkflowStructureError):
    """Raised when a choice's output matches none of its declared keys.

    Attributes:
        choice_name: The name of the choice task.
        key: The string form of the output that had no branch.
    """

    def __init__(
        self,
        choice_name: str,
        key: str,
        result: WorkflowResult | None = None,
        tasks: TaskGraph | None = None,
    ) -> None:
        """Initialize the exception with the unmapped key.

        Args:
            choice_name: The name of the choice task.
            key: The string form of the output that had no branch.
            result: The partial workflow result.
            tasks: The graph that was being executed.
        """
        self.choice_name = choice_name
        self.key = key
        super().__init__(f"Choice '{choice_name}' has no branch for '{key}'", result, tasks)


class StepExecutionError(WorkflowExecutionError):
    """Raised when a step fails and no catch entry handles the failure.

    This wraps the underlying failure, providing context about which step failed
    and why it was not recovered.

    Attributes:
        step_name: The name of the step that failed.
        cause: The underlying failure: the raised exception or the ``Failure`` value.
    """

    def __init__(
        self,
        step_name: str,
        cause: Any = None,
        reason: str | None = None,
        result: WorkflowResult | None = None,
        tasks: TaskGraph | None = None,
    ) -> None:
        """Initialize the exception with step execution details.

        Args:
            step_name: The name of the step that failed.
            cause: The underlying failure, if any.
            reason: Why the failure was not recovered.
            result: The partial workflow result.
            tasks: The graph that was being executed.
        """
        self.step_name = step_name
        self.cause = cause
        msg = f"Step '{step_name}' failed"
        if cause is not None:
            msg += f": {cause}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, result, tasks)

    @property
    def original_error(self) -> Any:
        """The failure raised or returned by the step."""
        return self.cause
