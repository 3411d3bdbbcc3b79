"""Core domain module for activity-workflows.

This module exports the fundamental building blocks of a workflow graph: types,
immutable task definitions, step outcomes, execution results and the catch
pattern matcher.
"""

from __future__ import annotations

from activity_workflows.core.definition import (
    ActivityDefinition,
    CatchRoute,
    ChoiceDefinition,
    GraphEdge,
    TaskDefinition,
    TaskGraph,
)
from activity_workflows.core.matcher import describe_error, error_matches, matches
from activity_workflows.core.models import CaughtError, Transition, WorkflowResult
from activity_workflows.core.outcome import Failure, StepOutcome, Success
from activity_workflows.core.types import (
    END,
    END_LABEL,
    START_LABEL,
    THEN_LABEL,
    Context,
    Pointer,
    StepFunction,
    TaskType,
)

__all__ = [
    "END",
    "END_LABEL",
    "START_LABEL",
    "THEN_LABEL",
    "ActivityDefinition",
    "CatchRoute",
    "CaughtError",
    "ChoiceDefinition",
    "Context",
    "Failure",
    "GraphEdge",
    "Pointer",
    "StepFunction",
    "StepOutcome",
    "Success",
    "TaskDefinition",
    "TaskGraph",
    "TaskType",
    "Transition",
    "WorkflowResult",
    "describe_error",
    "error_matches",
    "matches",
]
