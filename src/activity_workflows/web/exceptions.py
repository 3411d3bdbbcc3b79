"""Exception handling for workflow web endpoints.

This module maps engine failures raised while running a workflow over HTTP to
JSON error responses carrying the partial trace.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from litestar import Response
from litestar.status_codes import HTTP_422_UNPROCESSABLE_ENTITY

from activity_workflows.exceptions import WorkflowStructureError
from activity_workflows.web.dto import WorkflowResultDTO, to_jsonable

if TYPE_CHECKING:  # pragma: no cover
    from litestar import Request

    from activity_workflows.exceptions import WorkflowExecutionError

__all__ = ["workflow_execution_error_handler"]


def workflow_execution_error_handler(
    _request: Request,
    exc: WorkflowExecutionError,
) -> Response:
    """Exception handler for WorkflowExecutionError.

    Returns a 422 Unprocessable Entity response describing the failure, the
    partial result and a diagram URL highlighting the path taken.

    Args:
        request: The Litestar request object.
        exc: The WorkflowExecutionError exception.

    Returns:
        Response with error details and the partial trace.
    """
    result = None
    if exc.result is not None:
        result = asdict(WorkflowResultDTO.from_result(exc.result))

    return Response(
        content={
            "error": "structure_error" if isinstance(exc, WorkflowStructureError) else "step_failed",
            "error_type": type(exc).__name__,
            "message": str(exc),
            "original_error": to_jsonable(exc.original_error),
            "result": result,
            "diagram_url": exc.to_diagram_png_url(),
        },
        status_code=HTTP_422_UNPROCESSABLE_ENTITY,
        media_type="application/json",
    )
