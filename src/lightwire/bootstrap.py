"""
Bootstrapping of an application from its configuration directory.

The Bootstrap reads the configuration, substitutes placeholders, plans and
constructs the component graph, and hands control to the entry point:

    Bootstrap(ConfigurationLoader("config")).run(router)          # application
    Bootstrap(ConfigurationLoader("config")).run_command("cleanup")  # command

Each run resolves the graph once and keeps the constructed instances for
the lifetime of that run only.
"""

import logging
from typing import Any, Optional

from lightwire.analysis import DEFAULT_VISIT_LIMIT, ConstructionPlan, GraphAnalyzer
from lightwire.capabilities import (
    Router,
    require_command,
    require_command_result,
    require_request_handler,
)
from lightwire.component_builder import ComponentBuilder
from lightwire.configuration import Configuration, ConfigurationLoader
from lightwire.errors import GraphError
from lightwire.factory import ObjectFactory
from lightwire.graph import ComponentGraph, parse_component_graph
from lightwire.instances import InstanceRegistry
from lightwire.logs import configure_logging
from lightwire.placeholders import PlaceholderSubstitutor, RoutedTarget
from lightwire.registry import TypeRegistry

__all__ = ["Bootstrap", "format_command_outcome"]

logger = logging.getLogger(__name__)


class Bootstrap:
    """Resolve a configured component graph and run its entry point.

    Args:
        loader: Source of the configuration; defaults to the directory named
            by ``$LIGHTWIRE_CONFIG_DIR``.
        types: Registry resolving the ``class`` identifiers of components.
        visit_limit: Bound on analyzer visits before the graph is rejected.
        configure_logs: Whether to configure logging from the ``environment``
            parameter before resolving anything.
    """

    def __init__(
        self,
        loader: Optional[ConfigurationLoader] = None,
        types: Optional[TypeRegistry] = None,
        visit_limit: int = DEFAULT_VISIT_LIMIT,
        configure_logs: bool = True,
    ):
        self._loader = loader or ConfigurationLoader()
        self._types = types or TypeRegistry()
        self._analyzer = GraphAnalyzer(visit_limit)
        self._substitutor = PlaceholderSubstitutor()
        self._configure_logs = configure_logs

    def run(self, router: Router) -> Any:
        """Handle one request with the configured application entry point.

        Returns:
            Whatever the entry point's ``process`` returns.

        Raises:
            ConfigurationError, GraphError, ConstructionError: If the graph
                cannot be loaded, resolved or built.
            CapabilityError: If the entry point is not a RequestHandler; it is
                raised before the request is dispatched.
        """
        configuration = self._load_configuration()

        request = router.build_request()
        routed = RoutedTarget(request.get_controller(), request.get_action())
        logger.debug("Routed to %s.%s", routed.controller, routed.action)

        graph = self.resolve_graph(configuration, routed)
        root = configuration.application_starting_point
        instances = self.build(graph, root)

        handler = require_request_handler(root, instances[root])
        return handler.process(request)

    def run_command(self, name: str) -> str:
        """Execute the command component called ``name``.

        Returns:
            A status line describing the command's outcome.

        Raises:
            GraphError: If ``name`` is not declared in the dependency description.
            ConfigurationError: If its type identifier cannot be resolved.
            CapabilityError: If the component is not a Command or does not
                return a CommandResult.
        """
        configuration = self._load_configuration()
        graph = self.resolve_graph(configuration)

        spec = graph.get(name)
        if spec is None:
            raise GraphError(
                f"Component {name!r} does not exist, check the dependency "
                "description and the name passed with the command"
            )
        self._types.resolve(spec.type_id)

        instances = self.build(graph, name)
        command = require_command(name, instances[name])

        result = require_command_result(name, command.execute())
        logger.warning("Command ended with the result: %r", result)
        return format_command_outcome(result.status, result.message)

    def plan(self, name: str) -> ConstructionPlan:
        """Compute the construction plan for ``name`` without building anything."""
        configuration = self._load_configuration()
        return self._analyzer.compute_order(self.resolve_graph(configuration), name)

    def resolve_graph(
        self, configuration: Configuration, routed: Optional[RoutedTarget] = None
    ) -> ComponentGraph:
        """Check, parse and substitute the configured dependency description."""
        self._substitutor.check_required_placeholders(
            configuration.dependencies_text, configuration.application_starting_point
        )
        graph = parse_component_graph(configuration.dependencies_text)
        return self._substitutor.substitute(graph, configuration.parameters, routed)

    def build(self, graph: ComponentGraph, root: str) -> InstanceRegistry:
        plan = self._analyzer.compute_order(graph, root)
        factory = ObjectFactory(ComponentBuilder(self._types))
        return factory.build(graph, plan)

    def _load_configuration(self) -> Configuration:
        configuration = self._loader.load()
        if self._configure_logs:
            configure_logging(configuration.environment)
        logger.debug(
            "Loaded configuration from %s for environment %r",
            self._loader.config_dir,
            configuration.environment,
        )
        return configuration


def format_command_outcome(status: bool, message: str) -> str:
    outcome = "Command succeeded" if status else "Command failed"
    return f"{outcome} with message {message}\n"
