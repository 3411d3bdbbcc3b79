"""Activity builder: a unit of work chained by success and failure edges."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from activity_workflows.core.definition import ActivityDefinition, CatchRoute
from activity_workflows.core.types import TaskType
from activity_workflows.steps.base import BaseTask

if TYPE_CHECKING:
    from activity_workflows.core.types import StepFunction

NextT = TypeVar("NextT", bound=BaseTask)


class Activity(BaseTask):
    """A single unit of work in a workflow.

    Define an async function and chain activities together to create a workflow.

    Example:
        >>> fetch = Activity("fetch", fetch_document)
        >>> fetch.then(Activity("parse", parse_document)).then(Activity("store", store_document))
        >>> fetch.catch("*Timeout*", Activity("notify", notify_on_call))
        >>> fetch.catch("NotFound", None)  # end the workflow successfully
    """

    task_type: TaskType = TaskType.ACTIVITY

    def __init__(self, name: str, fn: StepFunction, *, start: bool = False) -> None:
        """Initialize the activity.

        Args:
            name: Unique identifier for the activity.
            fn: Async step function called as ``fn(input, context)``.
            start: Mark this activity as the entry point.
        """
        super().__init__(name, fn, start=start)
        self.next: BaseTask | None = None
        self.catch_config: dict[str, BaseTask | None] = {}

    def then(self, next_task: NextT) -> NextT:
        """Chain a task to run with this activity's output when it succeeds.

        Args:
            next_task: The activity or choice to run next.

        Returns:
            ``next_task``, so chains read left to right.
        """
        self.next = next_task
        return next_task

    def catch(self, pattern: str, next_task: BaseTask | None) -> Activity:
        """Route failures matching ``pattern`` to another task, or to the end.

        Entries are tried in the order they were first declared and the first
        match wins. Declaring the same pattern again replaces its target in place.

        Args:
            pattern: Catch pattern, optionally with leading/trailing ``*`` wildcards.
            next_task: Task receiving a :class:`~activity_workflows.core.models.CaughtError`,
                or ``None`` to end the workflow successfully.

        Returns:
            This activity, for further ``catch`` calls.
        """
        self.catch_config[pattern] = next_task
        return self

    def to_definition(self) -> ActivityDefinition:
        catch = None
        if self.catch_config:
            catch = {
                pattern: CatchRoute(then=target.name if target is not None else None)
                for pattern, target in self.catch_config.items()
            }
        return ActivityDefinition(
            name=self.name,
            fn=self.fn,
            then=self.next.name if self.next is not None else None,
            catch=catch,
            start=self.start,
        )

    def successors(self) -> list[BaseTask]:
        successors = [self.next] if self.next is not None else []
        successors.extend(target for target in self.catch_config.values() if target is not None)
        return successors
