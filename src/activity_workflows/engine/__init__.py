"""Workflow execution engine implementations.

This module provides the in-process engine that interprets task graphs and the
registry holding named workflows.
"""

from __future__ import annotations

from activity_workflows.engine.local import LocalExecutionEngine, run
from activity_workflows.engine.registry import WorkflowRegistry

__all__ = [
    "LocalExecutionEngine",
    "WorkflowRegistry",
    "run",
]
