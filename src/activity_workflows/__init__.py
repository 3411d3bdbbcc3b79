"""Activity Workflows - async activity/choice workflow engine for Litestar.

This package lets you declare a workflow as a graph of named tasks, run it
in-process with an initial input and a shared context, and get back an ordered
trace of the transitions it took.

Key Features:
    - Activities chained by ``then`` and routed on failure by wildcard ``catch`` patterns
    - Choices branching on the string form of their result
    - Cycle-safe flattening of builders into an immutable task graph
    - Execution traces rendered as MermaidJS diagrams
    - Litestar plugin exposing registered workflows over a REST API

Example:
    >>> from activity_workflows import Activity, Workflow
    >>>
    >>> async def fetch(input, context):
    ...     return await download(input["url"])
    >>>
    >>> fetch_task = Activity("fetch", fetch)
    >>> fetch_task.then(Activity("parse", parse)).catch("*Timeout*", None)
    >>> result = await Workflow(fetch_task).run({"url": "https://example.com"})
"""

from __future__ import annotations

from activity_workflows.__metadata__ import __project__, __version__
from activity_workflows.core.models import CaughtError, Transition, WorkflowResult
from activity_workflows.core.outcome import Failure, Success
from activity_workflows.core.types import END
from activity_workflows.engine.local import LocalExecutionEngine, run
from activity_workflows.engine.registry import WorkflowRegistry
from activity_workflows.exceptions import (
    StartTaskNotFoundError,
    StepExecutionError,
    TaskNotFoundError,
    UnmappedChoiceError,
    WorkflowExecutionError,
    WorkflowNotFoundError,
    WorkflowsError,
    WorkflowStructureError,
)
from activity_workflows.plugin import WorkflowPlugin, WorkflowPluginConfig
from activity_workflows.steps.activity import Activity
from activity_workflows.steps.choice import Choice
from activity_workflows.workflow import Workflow

__all__ = (
    "END",
    "Activity",
    "CaughtError",
    "Choice",
    "Failure",
    "LocalExecutionEngine",
    "StartTaskNotFoundError",
    "StepExecutionError",
    "Success",
    "TaskNotFoundError",
    "Transition",
    "UnmappedChoiceError",
    "Workflow",
    "WorkflowExecutionError",
    "WorkflowNotFoundError",
    "WorkflowPlugin",
    "WorkflowPluginConfig",
    "WorkflowRegistry",
    "WorkflowResult",
    "WorkflowStructureError",
    "WorkflowsError",
    "__project__",
    "__version__",
    "run",
)
