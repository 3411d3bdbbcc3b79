"""Task builders for activity-workflows."""

from __future__ import annotations

from activity_workflows.steps.activity import Activity
from activity_workflows.steps.base import BaseTask
from activity_workflows.steps.choice import Choice

__all__ = [
    "Activity",
    "BaseTask",
    "Choice",
]
