"""Tests for the Activity and Choice builders."""

from __future__ import annotations

from typing import Any

import pytest

from activity_workflows.core.definition import ActivityDefinition, CatchRoute, ChoiceDefinition
from activity_workflows.core.types import TaskType
from activity_workflows.steps import Activity, BaseTask, Choice


async def noop(input: Any, context: dict[str, Any]) -> Any:
    return input


@pytest.mark.unit
class TestActivity:
    """Tests for the Activity builder."""

    def test_activity_creation(self) -> None:
        """Test basic activity creation."""
        task = Activity("fetch", noop)

        assert task.name == "fetch"
        assert task.fn is noop
        assert task.start is False
        assert task.next is None
        assert task.catch_config == {}
        assert task.task_type == TaskType.ACTIVITY
        assert repr(task) == "Activity('fetch')"

    def test_then_returns_next_task(self) -> None:
        """Test that then() returns its argument so chains read left to right."""
        fetch = Activity("fetch", noop)
        parse = Activity("parse", noop)

        assert fetch.then(parse) is parse
        assert fetch.next is parse

    def test_catch_returns_self(self) -> None:
        """Test that catch() returns the activity for further catch calls."""
        fetch = Activity("fetch", noop)
        notify = Activity("notify", noop)

        assert fetch.catch("Timeout", notify).catch("NotFound", None) is fetch
        assert fetch.catch_config == {"Timeout": notify, "NotFound": None}

    def test_redeclared_catch_keeps_position(self) -> None:
        """Test that declaring a pattern again replaces its target in place."""
        fetch = Activity("fetch", noop)
        notify = Activity("notify", noop)
        fetch.catch("Timeout", None).catch("*", None).catch("Timeout", notify)

        assert list(fetch.catch_config) == ["Timeout", "*"]
        assert fetch.catch_config["Timeout"] is notify

    def test_to_definition(self) -> None:
        """Test freezing an activity into its definition."""
        fetch = Activity("fetch", noop, start=True)
        fetch.then(Activity("parse", noop))
        fetch.catch("Timeout", Activity("notify", noop)).catch("NotFound", None)

        definition = fetch.to_definition()

        assert isinstance(definition, ActivityDefinition)
        assert definition.name == "fetch"
        assert definition.fn is noop
        assert definition.then == "parse"
        assert dict(definition.catch) == {"Timeout": CatchRoute(then="notify"), "NotFound": CatchRoute(then=None)}
        assert definition.start is True

    def test_to_definition_without_catch(self) -> None:
        """Test an activity without catch entries has no catch mapping."""
        definition = Activity("fetch", noop).to_definition()

        assert definition.then is None
        assert definition.catch is None

    def test_successors(self) -> None:
        """Test successors list the then target before catch targets."""
        fetch = Activity("fetch", noop)
        parse = fetch.then(Activity("parse", noop))
        notify = Activity("notify", noop)
        fetch.catch("Timeout", notify).catch("NotFound", None)

        assert fetch.successors() == [parse, notify]


@pytest.mark.unit
class TestChoice:
    """Tests for the Choice builder."""

    def test_choice_creation(self) -> None:
        """Test basic choice creation."""
        route = Choice("route", noop)

        assert route.name == "route"
        assert route.choices == {}
        assert route.task_type == TaskType.CHOICE

    def test_choice_returns_self(self) -> None:
        """Test that choice() returns the choice for further calls."""
        route = Choice("route", noop)
        big = Activity("big", noop)

        assert route.choice("big", big).choice("none", None) is route
        assert route.choices == {"big": big, "none": None}

    def test_to_definition(self) -> None:
        """Test freezing a choice into its definition."""
        route = Choice("route", noop).choice("big", Activity("big", noop)).choice("none", None)

        definition = route.to_definition()

        assert isinstance(definition, ChoiceDefinition)
        assert dict(definition.choices) == {"big": "big", "none": None}
        assert route.successors()[0].name == "big"


@pytest.mark.unit
class TestToTaskGraph:
    """Tests for flattening builders into a TaskGraph."""

    def test_base_task_is_abstract(self) -> None:
        """Test that BaseTask cannot be instantiated directly."""
        with pytest.raises(TypeError):
            BaseTask("x", noop)  # type: ignore[abstract]

    def test_single_task(self) -> None:
        """Test flattening a lone activity."""
        graph = Activity("fetch", noop).to_task_graph()

        assert graph.names == ["fetch"]

    def test_linear_chain(self, linear_start: Activity) -> None:
        """Test flattening a linear chain keeps its order."""
        assert linear_start.to_task_graph().names == ["A", "B", "C"]

    def test_pre_order_across_branches(self) -> None:
        """Test that each successor's closure is flattened before the next one."""
        fetch = Activity("fetch", noop)
        fetch.then(Activity("parse", noop)).then(Activity("store", noop))
        fetch.catch("Timeout", Activity("notify", noop)).catch("*", Activity("log", noop))

        assert fetch.to_task_graph().names == ["fetch", "parse", "store", "notify", "log"]

    def test_shared_successor_listed_once(self) -> None:
        """Test a task reachable along several paths appears once."""
        store = Activity("store", noop)
        route = Choice("route", noop)
        route.choice("a", Activity("a", noop)).choice("b", Activity("b", noop))
        route.choices["a"].then(store)  # type: ignore[union-attr]
        route.choices["b"].then(store)  # type: ignore[union-attr]

        assert route.to_task_graph().names == ["route", "a", "store", "b"]

    def test_cycle_terminates(self) -> None:
        """Test that flattening a cyclic graph terminates."""
        fetch = Activity("fetch", noop)
        check = Choice("check", noop)
        fetch.then(check)
        check.choice("retry", fetch).choice("done", None)

        graph = fetch.to_task_graph()

        assert graph.names == ["fetch", "check"]
        assert graph.get("check").choices["retry"] == "fetch"  # type: ignore[union-attr]

    def test_self_loop(self) -> None:
        """Test an activity catching into itself."""
        fetch = Activity("fetch", noop)
        fetch.catch("Timeout", fetch)

        assert fetch.to_task_graph().names == ["fetch"]

    def test_same_name_first_wins(self) -> None:
        """Test that distinct builders sharing a name keep the first definition."""
        first = Activity("step", noop)
        second = Activity("step", noop)
        start = Activity("start", noop)
        start.then(first)
        start.catch("*", second)
        second.then(Activity("after", noop))

        graph = start.to_task_graph()

        assert graph.names == ["start", "step", "after"]
        assert graph.get("step").then is None  # type: ignore[union-attr]

    def test_start_flag_carried_over(self) -> None:
        """Test that a start flag on a later builder selects the start task."""
        fetch = Activity("fetch", noop)
        fetch.then(Activity("parse", noop, start=True))

        graph = fetch.to_task_graph()

        assert graph.start_task is not None
        assert graph.start_task.name == "parse"
