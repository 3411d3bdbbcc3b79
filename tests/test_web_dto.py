"""Tests for web DTO conversion."""

from __future__ import annotations

from typing import Any

import pytest

from activity_workflows.core.models import CaughtError
from activity_workflows.web.dto import TaskDTO, WorkflowDetailDTO, to_jsonable


async def identity(input: Any, context: dict[str, Any]) -> Any:
    return input


@pytest.mark.unit
class TestToJsonable:
    """Tests for payload conversion."""

    @pytest.mark.parametrize("value", [None, True, 3, 1.5, "text"])
    def test_scalars_unchanged(self, value: Any) -> None:
        """Test JSON scalars pass through."""
        assert to_jsonable(value) == value

    def test_caught_error(self) -> None:
        """Test a caught error keeps its key and describes its error."""
        caught = CaughtError(key="*Timeout*", error=TimeoutError("slow upstream"))

        assert to_jsonable(caught) == {"key": "*Timeout*", "error": "TimeoutError: slow upstream"}

    def test_containers(self) -> None:
        """Test nested containers are converted recursively."""
        value = {"items": (1, {"nested": ValueError()}), 2: {"a"}}

        assert to_jsonable(value) == {"items": [1, {"nested": "ValueError"}], "2": ["a"]}

    def test_unknown_object(self) -> None:
        """Test unknown objects fall back to their string form."""

        class Token:
            def __str__(self) -> str:
                return "token"

        assert to_jsonable(Token()) == "token"


@pytest.mark.unit
class TestDefinitionDTOs:
    """Tests for definition DTOs."""

    def test_workflow_detail(self, document_workflow: Any) -> None:
        """Test a workflow is described task by task."""
        detail = WorkflowDetailDTO.from_workflow(document_workflow)

        assert detail.name == "ingest"
        assert [task.name for task in detail.tasks] == ["fetch", "parse", "notify"]
        assert detail.tasks[1] == TaskDTO(name="parse", type="activity", start=False, then=None, catch=None)
