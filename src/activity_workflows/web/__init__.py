"""Web API for activity-workflows.

This module provides the REST controller, DTOs and exception handler used to
inspect and run registered workflows over HTTP. The API is automatically enabled
when using WorkflowPlugin with enable_api=True (the default).

Example:
    Basic usage with WorkflowPlugin (API enabled by default)::

        from litestar import Litestar
        from activity_workflows import WorkflowPlugin, WorkflowPluginConfig

        app = Litestar(
            plugins=[
                WorkflowPlugin(
                    config=WorkflowPluginConfig(
                        enable_api=True,  # Default
                        api_path_prefix="/workflows",
                    )
                ),
            ],
        )

    With authentication guards::

        config = WorkflowPluginConfig(
            api_path_prefix="/api/v1/workflows",
            api_guards=[require_auth_guard],
        )

    Disable API endpoints::

        app = Litestar(
            plugins=[
                WorkflowPlugin(config=WorkflowPluginConfig(enable_api=False)),
            ],
        )
"""

from __future__ import annotations

from activity_workflows.web.controllers import WorkflowController
from activity_workflows.web.dto import (
    GraphDTO,
    RunWorkflowDTO,
    TaskDTO,
    TransitionDTO,
    WorkflowDetailDTO,
    WorkflowResultDTO,
    WorkflowSummaryDTO,
    to_jsonable,
)
from activity_workflows.web.exceptions import workflow_execution_error_handler

__all__ = [
    "GraphDTO",
    "RunWorkflowDTO",
    "TaskDTO",
    "TransitionDTO",
    "WorkflowController",
    "WorkflowDetailDTO",
    "WorkflowResultDTO",
    "WorkflowSummaryDTO",
    "to_jsonable",
    "workflow_execution_error_handler",
]
