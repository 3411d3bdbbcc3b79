"""Litestar plugin for workflow integration.

This module provides the WorkflowPlugin for exposing activity-workflows
through a Litestar application.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from litestar.di import Provide
from litestar.plugins import InitPluginProtocol

from activity_workflows.engine.local import LocalExecutionEngine
from activity_workflows.engine.registry import WorkflowRegistry

if TYPE_CHECKING:
    from litestar.config.app import AppConfig

    from activity_workflows.workflow import Workflow

__all__ = ["WorkflowPlugin", "WorkflowPluginConfig"]

logger = logging.getLogger(__name__)


@dataclass
class WorkflowPluginConfig:
    """Configuration for the WorkflowPlugin.

    Attributes:
        registry: Optional pre-configured WorkflowRegistry. If not provided,
            a new one will be created.
        engine: Optional pre-configured LocalExecutionEngine. If not provided,
            one will be created with ``step_timeout``.
        auto_register_workflows: List of workflows to register with the registry
            on app startup.
        dependency_key_registry: The key used for dependency injection of
            the WorkflowRegistry. Defaults to "workflow_registry".
        dependency_key_engine: The key used for dependency injection of
            the LocalExecutionEngine. Defaults to "workflow_engine".
        enable_api: Whether to enable the REST API endpoints. Defaults to True.
        api_path_prefix: URL path prefix for all workflow API endpoints.
            Defaults to "/workflows".
        api_guards: List of Litestar guards to apply to all workflow API endpoints.
        api_tags: OpenAPI tags to apply to workflow API endpoints.
        include_api_in_schema: Whether to include API endpoints in OpenAPI schema.
            Defaults to True.
        step_timeout: Per-step deadline in seconds for the engine the plugin
            creates. Ignored when ``engine`` is given.
    """

    registry: WorkflowRegistry | None = None
    engine: LocalExecutionEngine | None = None
    auto_register_workflows: list[Workflow] = field(default_factory=list)
    dependency_key_registry: str = "workflow_registry"
    dependency_key_engine: str = "workflow_engine"
    enable_api: bool = True
    api_path_prefix: str = "/workflows"
    api_guards: list[Any] = field(default_factory=list)
    api_tags: list[str] = field(default_factory=lambda: ["Workflows"])
    include_api_in_schema: bool = True
    step_timeout: float | None = None


class WorkflowPlugin(InitPluginProtocol):
    """Litestar plugin for workflow management.

    This plugin provides dependency injection for the WorkflowRegistry and the
    LocalExecutionEngine and, unless disabled, mounts the workflow REST API.

    Example:
        Basic usage with auto-registration::

            from litestar import Litestar
            from activity_workflows import Activity, Workflow, WorkflowPlugin, WorkflowPluginConfig

            ingest = Workflow(Activity("fetch", fetch_document), name="ingest")

            app = Litestar(
                plugins=[
                    WorkflowPlugin(
                        config=WorkflowPluginConfig(auto_register_workflows=[ingest])
                    )
                ]
            )

        Using in a route handler::

            from litestar import post
            from activity_workflows import LocalExecutionEngine, WorkflowRegistry


            @post("/ingest")
            async def ingest_document(
                data: dict,
                workflow_engine: LocalExecutionEngine,
                workflow_registry: WorkflowRegistry,
            ) -> dict:
                workflow = workflow_registry.get_workflow("ingest")
                result = await workflow.run(data, engine=workflow_engine)
                return {"output": result.output}
    """

    __slots__ = ("_config", "_engine", "_registry")

    def __init__(self, config: WorkflowPluginConfig | None = None) -> None:
        """Initialize the plugin.

        Args:
            config: Optional configuration for the plugin.
        """
        self._config = config or WorkflowPluginConfig()
        self._registry: WorkflowRegistry | None = None
        self._engine: LocalExecutionEngine | None = None

    @property
    def config(self) -> WorkflowPluginConfig:
        """Get the plugin configuration."""
        return self._config

    @property
    def registry(self) -> WorkflowRegistry:
        """Get the workflow registry.

        Returns:
            The WorkflowRegistry instance.

        Raises:
            RuntimeError: If accessed before plugin initialization.
        """
        if self._registry is None:
            msg = "WorkflowPlugin has not been initialized. Access registry after app startup."
            raise RuntimeError(msg)
        return self._registry

    @property
    def engine(self) -> LocalExecutionEngine:
        """Get the execution engine.

        Returns:
            The LocalExecutionEngine instance.

        Raises:
            RuntimeError: If accessed before plugin initialization.
        """
        if self._engine is None:
            msg = "WorkflowPlugin has not been initialized. Access engine after app startup."
            raise RuntimeError(msg)
        return self._engine

    def on_app_init(self, app_config: AppConfig) -> AppConfig:
        """Initialize the plugin when the Litestar app starts.

        This method:
        1. Creates or uses the provided WorkflowRegistry
        2. Creates or uses the provided LocalExecutionEngine
        3. Registers any auto_register_workflows
        4. Adds dependency providers to the app config
        5. Optionally registers the REST API controller if enable_api=True

        Args:
            app_config: The Litestar application configuration.

        Returns:
            The modified application configuration.
        """
        self._registry = self._config.registry or WorkflowRegistry()
        self._engine = self._config.engine or LocalExecutionEngine(step_timeout=self._config.step_timeout)

        for workflow in self._config.auto_register_workflows:
            self._registry.register(workflow)
        logger.debug("Registered workflows: %s", [w.name for w in self._registry.list_workflows()])

        def provide_registry() -> WorkflowRegistry:
            return self._registry  # type: ignore[return-value]

        def provide_engine() -> LocalExecutionEngine:
            return self._engine  # type: ignore[return-value]

        app_config.dependencies[self._config.dependency_key_registry] = Provide(
            provide_registry,
            sync_to_thread=False,
        )
        app_config.dependencies[self._config.dependency_key_engine] = Provide(
            provide_engine,
            sync_to_thread=False,
        )

        if self._config.enable_api:
            from litestar import Router

            from activity_workflows.exceptions import WorkflowExecutionError
            from activity_workflows.web.controllers import WorkflowController
            from activity_workflows.web.exceptions import workflow_execution_error_handler

            workflow_router = Router(
                path=self._config.api_path_prefix,
                route_handlers=[WorkflowController],
                guards=self._config.api_guards,
                tags=self._config.api_tags,
                include_in_schema=self._config.include_api_in_schema,
            )
            app_config.route_handlers.append(workflow_router)
            logger.debug("Workflow API mounted at '%s'", self._config.api_path_prefix)

            app_config.exception_handlers[WorkflowExecutionError] = workflow_execution_error_handler  # type: ignore[assignment]

        return app_config
