"""Choice builder for workflow branching."""

from __future__ import annotations

from typing import TYPE_CHECKING

from activity_workflows.core.definition import ChoiceDefinition
from activity_workflows.core.types import TaskType
from activity_workflows.steps.base import BaseTask

if TYPE_CHECKING:
    from activity_workflows.core.types import StepFunction


class Choice(BaseTask):
    """A branching point in a workflow.

    The step function's result, converted with ``str()``, selects the branch. The
    selected task receives the choice's own input, not the function's result.

    Example:
        >>> async def route(input, context):
        ...     return "large" if input["size"] > 100 else "small"
        >>> router = (
        ...     Choice("route", route)
        ...     .choice("large", Activity("batch", batch_upload))
        ...     .choice("small", Activity("inline", inline_upload))
        ... )
    """

    task_type: TaskType = TaskType.CHOICE

    def __init__(self, name: str, fn: StepFunction, *, start: bool = False) -> None:
        """Initialize the choice.

        Args:
            name: Unique identifier for the choice.
            fn: Async function whose result selects the branch.
            start: Mark this choice as the entry point.
        """
        super().__init__(name, fn, start=start)
        self.choices: dict[str, BaseTask | None] = {}

    def choice(self, key: str, next_task: BaseTask | None) -> Choice:
        """Declare the branch taken when the function's result stringifies to ``key``.

        Args:
            key: The decision key.
            next_task: The task to continue with, or ``None`` to end the workflow.

        Returns:
            This choice, for further ``choice`` calls.
        """
        self.choices[key] = next_task
        return self

    def to_definition(self) -> ChoiceDefinition:
        return ChoiceDefinition(
            name=self.name,
            fn=self.fn,
            choices={key: target.name if target is not None else None for key, target in self.choices.items()},
            start=self.start,
        )

    def successors(self) -> list[BaseTask]:
        return [target for target in self.choices.values() if target is not None]
