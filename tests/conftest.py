"""Shared test fixtures for activity-workflows test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from activity_workflows.core.types import Context
    from activity_workflows.engine.local import LocalExecutionEngine
    from activity_workflows.engine.registry import WorkflowRegistry
    from activity_workflows.steps.activity import Activity
    from activity_workflows.workflow import Workflow


async def identity(input: Any, context: Context) -> Any:
    """Step function returning its input unchanged."""
    return input


class MockEventBus:
    """Mock event bus for testing."""

    def __init__(self) -> None:
        """Initialize mock event bus."""
        self.events: list[tuple[str, dict[str, Any]]] = []

    async def emit(self, event_type: str, **kwargs: Any) -> None:
        """Emit an event."""
        self.events.append((event_type, kwargs))

    @property
    def event_types(self) -> list[str]:
        return [event_type for event_type, _ in self.events]


@pytest.fixture
def mock_event_bus() -> MockEventBus:
    """Create mock event bus.

    Returns:
        MockEventBus instance
    """
    return MockEventBus()


@pytest.fixture
def local_engine() -> LocalExecutionEngine:
    """Create a local execution engine.

    Returns:
        LocalExecutionEngine instance
    """
    from activity_workflows.engine.local import LocalExecutionEngine

    return LocalExecutionEngine()


@pytest.fixture
def local_engine_with_event_bus(mock_event_bus: MockEventBus) -> LocalExecutionEngine:
    """Create a local execution engine wired to the mock event bus.

    Args:
        mock_event_bus: Mock event bus

    Returns:
        LocalExecutionEngine instance
    """
    from activity_workflows.engine.local import LocalExecutionEngine

    return LocalExecutionEngine(event_bus=mock_event_bus)


@pytest.fixture
def workflow_registry() -> WorkflowRegistry:
    """Create an empty workflow registry.

    Returns:
        WorkflowRegistry instance
    """
    from activity_workflows.engine.registry import WorkflowRegistry

    return WorkflowRegistry()


@pytest.fixture
def linear_start() -> Activity:
    """Create the chain A -> B -> C of identity activities.

    Returns:
        The first activity of the chain
    """
    from activity_workflows.steps.activity import Activity

    a = Activity("A", identity)
    a.then(Activity("B", identity)).then(Activity("C", identity))
    return a


@pytest.fixture
def linear_workflow(linear_start: Activity) -> Workflow:
    """Create a workflow around the A -> B -> C chain.

    Returns:
        Workflow instance
    """
    from activity_workflows.workflow import Workflow

    return Workflow(linear_start, name="linear", description="Three identity steps")


@pytest.fixture
def document_workflow() -> Workflow:
    """Create a document ingestion workflow with failure routing.

    ``fetch`` fails with the ``error`` value of its input when one is given,
    routes ``*Timeout*`` failures to ``notify`` and ends on ``NotFound``. The
    ``parse`` step upper-cases the title and ``notify`` records the caught key
    in the context.

    Returns:
        Workflow instance
    """
    from activity_workflows.steps.activity import Activity
    from activity_workflows.workflow import Workflow

    async def fetch(input: dict[str, Any], context: Context) -> dict[str, Any]:
        if input.get("error"):
            raise RuntimeError(input["error"])
        return {"title": input["title"]}

    async def parse(input: dict[str, Any], context: Context) -> dict[str, Any]:
        context["parsed"] = True
        return {"title": input["title"].upper()}

    async def notify(input: Any, context: Context) -> str:
        context["notified"] = input.key
        return "notified"

    fetch_task = Activity("fetch", fetch)
    fetch_task.then(Activity("parse", parse))
    fetch_task.catch("*Timeout*", Activity("notify", notify)).catch("NotFound", None)

    return Workflow(fetch_task, name="ingest", description="Fetch and parse a document")


# Pytest configuration
def pytest_configure(config: Any) -> None:
    """Configure pytest with custom markers.

    Args:
        config: Pytest config object
    """
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
