"""Local in-process async execution engine.

This module provides the interpreter that walks a task graph from its start task
to the End Pointer, one step at a time, recording the transitions it takes.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, NoReturn
from uuid import UUID, uuid4

from activity_workflows.core.definition import TaskGraph
from activity_workflows.core.matcher import error_matches
from activity_workflows.core.models import CaughtError, Transition, WorkflowResult
from activity_workflows.core.outcome import Failure, Success
from activity_workflows.core.types import END_LABEL, START_LABEL, THEN_LABEL, TaskType
from activity_workflows.exceptions import (
    StartTaskNotFoundError,
    StepExecutionError,
    TaskNotFoundError,
    UnmappedChoiceError,
    WorkflowExecutionError,
)

if TYPE_CHECKING:
    from activity_workflows.core.definition import TaskDefinition
    from activity_workflows.core.outcome import StepOutcome
    from activity_workflows.core.types import Context

__all__ = ["LocalExecutionEngine", "run"]

logger = logging.getLogger(__name__)


@dataclass
class _RunState:
    """Mutable state of a single execution."""

    execution_id: UUID
    graph: TaskGraph
    context: Context
    transitions: list[Transition] = field(default_factory=list)
    current: TaskDefinition | None = None
    payload: Any = None

    def transition(
        self,
        label: str,
        destination: TaskDefinition | None,
        payload: Any,
        edge: str | None = None,
    ) -> None:
        self.transitions.append(Transition(label, self.current, destination, payload, edge))
        if destination is not None:
            self.current = destination
        self.payload = payload

    def follow(self, edge: str, destination: TaskDefinition, payload: Any) -> TaskDefinition:
        self.transition(edge, destination, payload, edge)
        return destination

    def end(self, output: Any, edge: str) -> None:
        self.transition(END_LABEL, None, output, edge)

    def partial_result(self, output: Any) -> WorkflowResult:
        return WorkflowResult(
            success=False,
            transitions=list(self.transitions),
            output=output,
            context=self.context,
        )


class LocalExecutionEngine:
    """In-process async interpreter for task graphs.

    Exactly one step runs at a time within an execution; awaiting the current
    step is the only suspension point. Separate calls to :meth:`run` share
    nothing but the read-only graph, so they may run concurrently.

    Attributes:
        event_bus: Optional event bus implementing ``async emit(event_type, **kwargs)``.
        step_timeout: Optional per-step deadline in seconds. A step exceeding it
            fails with ``TimeoutError``, which catch entries may route like any
            other failure.
    """

    def __init__(
        self,
        event_bus: Any | None = None,
        step_timeout: float | None = None,
    ) -> None:
        """Initialize the local execution engine.

        Args:
            event_bus: Optional event bus implementing emit method.
            step_timeout: Optional per-step deadline in seconds.
        """
        self.event_bus = event_bus
        self.step_timeout = step_timeout

    async def run(
        self,
        tasks: TaskGraph | Iterable[TaskDefinition],
        initial_input: Any = None,
        initial_context: Context | None = None,
    ) -> WorkflowResult:
        """Execute a task graph from its start task until it reaches the end.

        Args:
            tasks: The graph, or task definitions in graph order.
            initial_input: Payload handed to the start task.
            initial_context: Initial context values; the mapping is copied, and the
                copy is shared by every step of this execution.

        Returns:
            The successful WorkflowResult.

        Raises:
            WorkflowStructureError: If the graph has no start task, a pointer names
                an unknown task, or a choice output has no branch.
            StepExecutionError: If a step fails and no catch entry handles it.

        Example:
            >>> engine = LocalExecutionEngine()
            >>> result = await engine.run(workflow.to_task_graph(), {"document_id": "doc_123"})
            >>> [t.label for t in result.transitions]
            ['(start)', 'then', '(end)']
        """
        graph = TaskGraph.from_tasks(tasks)
        state = _RunState(execution_id=uuid4(), graph=graph, context=dict(initial_context or {}))

        try:
            task = graph.start_task
            if task is None:
                raise StartTaskNotFoundError(state.partial_result(initial_input), graph)
            logger.debug("Execution %s starting at task '%s'", state.execution_id, task.name)

            await self._emit("workflow.started", execution_id=state.execution_id, start_task=task.name)
            state.transition(START_LABEL, task, initial_input)

            while task is not None:
                outcome = await self._run_step(state, task)
                if isinstance(outcome, Success):
                    task = self._on_success(state, task, outcome.value)
                else:
                    task = self._on_failure(state, task, outcome.error)
        except WorkflowExecutionError as e:
            logger.warning("Execution %s failed: %s", state.execution_id, e)
            await self._emit(
                "workflow.failed",
                execution_id=state.execution_id,
                error=str(e),
                error_type=type(e).__name__,
                failed_step=state.current.name if state.current else None,
            )
            raise

        logger.debug("Execution %s trace: %s", state.execution_id, [t.label for t in state.transitions])
        logger.info("Execution %s completed after %d transitions", state.execution_id, len(state.transitions))
        await self._emit("workflow.completed", execution_id=state.execution_id, output=state.payload)

        return WorkflowResult(
            success=True,
            transitions=state.transitions,
            output=state.payload,
            context=state.context,
        )

    async def execute_step(self, task: TaskDefinition, payload: Any, context: Context) -> StepOutcome:
        """Invoke a single task's step function and normalise how it settled.

        A step may return a plain value, or a :class:`Success` or :class:`Failure`
        outcome, which is passed through unchanged.

        Args:
            task: The task to execute.
            payload: Input handed to the step function.
            context: The execution context.

        Returns:
            :class:`Success` with the returned value, or :class:`Failure` with the
            raised exception or the returned ``Failure``'s error.
        """
        try:
            result = task.fn(payload, context)
            if inspect.isawaitable(result):
                if self.step_timeout is not None:
                    result = await asyncio.wait_for(result, timeout=self.step_timeout)
                else:
                    result = await result
        except Exception as e:
            return Failure(e)

        if isinstance(result, (Success, Failure)):
            return result
        return Success(result)

    async def _run_step(self, state: _RunState, task: TaskDefinition) -> StepOutcome:
        logger.debug("Execution %s running task '%s'", state.execution_id, task.name)
        await self._emit("step.started", execution_id=state.execution_id, step_name=task.name)

        outcome = await self.execute_step(task, state.payload, state.context)

        if isinstance(outcome, Success):
            logger.debug("Task '%s' succeeded with %r", task.name, outcome.value)
            await self._emit("step.completed", execution_id=state.execution_id, step_name=task.name)
        else:
            logger.debug("Task '%s' failed with %r", task.name, outcome.error)
            await self._emit(
                "step.failed",
                execution_id=state.execution_id,
                step_name=task.name,
                error=str(outcome.error),
            )
        return outcome

    def _on_success(self, state: _RunState, task: TaskDefinition, output: Any) -> TaskDefinition | None:
        if task.task_type == TaskType.ACTIVITY:
            if task.then is None:
                state.end(output, THEN_LABEL)
                return None
            return state.follow(THEN_LABEL, self._resolve(state, task.then, output), output)

        key = str(output)
        if key not in task.choices:
            raise UnmappedChoiceError(task.name, key, state.partial_result(output), state.graph)

        target = task.choices[key]
        if target is None:
            state.end(output, key)
            return None
        # choices route without transforming: the branch gets the choice's own input
        return state.follow(key, self._resolve(state, target, output), state.payload)

    def _on_failure(self, state: _RunState, task: TaskDefinition, error: Any) -> TaskDefinition | None:
        if task.task_type == TaskType.CHOICE:
            self._raise_unrecovered(state, task, error, "choices cannot catch failures")
        if task.catch is None:
            self._raise_unrecovered(state, task, error, "no catch entries")

        for pattern, route in task.catch.items():
            if error_matches(pattern, error):
                break
        else:
            self._raise_unrecovered(state, task, error, "no matching catch")

        logger.debug("Task '%s' failure caught by '%s'", task.name, pattern)
        caught = CaughtError(key=pattern, error=error)
        if route.then is None:
            state.end(caught, pattern)
            return None
        return state.follow(pattern, self._resolve(state, route.then, caught), caught)

    def _resolve(self, state: _RunState, name: str, output: Any) -> TaskDefinition:
        task = state.graph.get(name)
        if task is None:
            raise TaskNotFoundError(name, state.partial_result(output), state.graph)
        return task

    def _raise_unrecovered(self, state: _RunState, task: TaskDefinition, error: Any, reason: str) -> NoReturn:
        exc = StepExecutionError(
            task.name,
            cause=error,
            reason=reason,
            result=state.partial_result(error),
            tasks=state.graph,
        )
        if isinstance(error, BaseException):
            raise exc from error
        raise exc

    async def _emit(self, event_type: str, **kwargs: Any) -> None:
        if self.event_bus:
            await self.event_bus.emit(event_type, **kwargs)


async def run(
    tasks: TaskGraph | Iterable[TaskDefinition],
    initial_input: Any = None,
    initial_context: Context | None = None,
    *,
    step_timeout: float | None = None,
) -> WorkflowResult:
    """Run a task graph with a default :class:`LocalExecutionEngine`.

    Args:
        tasks: The graph, or task definitions in graph order.
        initial_input: Payload handed to the start task.
        initial_context: Initial context values.
        step_timeout: Optional per-step deadline in seconds.

    Returns:
        The successful WorkflowResult.
    """
    engine = LocalExecutionEngine(step_timeout=step_timeout)
    return await engine.run(tasks, initial_input, initial_context)
