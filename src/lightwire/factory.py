"""
Instantiation of component graphs.

The ObjectFactory walks a ConstructionPlan backwards, building each
component once and injecting already-built instances wherever a spec
carries a Reference. The analyzer guarantees that every reference has been
constructed by the time its referrer is reached, so a missing instance here
means the plan and the graph disagree.
"""

import logging
from typing import Any, Optional

from lightwire.analysis import ConstructionPlan
from lightwire.component_builder import ComponentBuilder
from lightwire.domain import Argument, Reference
from lightwire.errors import GraphError
from lightwire.graph import ComponentGraph
from lightwire.instances import InstanceRegistry

__all__ = ["ObjectFactory"]

logger = logging.getLogger(__name__)


class ObjectFactory:
    """Instantiate components from a ConstructionPlan."""

    def __init__(self, component_builder: ComponentBuilder):
        self._component_builder = component_builder

    def build(
        self,
        graph: ComponentGraph,
        plan: ConstructionPlan,
        instances: Optional[InstanceRegistry] = None,
    ) -> InstanceRegistry:
        """Construct every component in the plan that is not yet built.

        Args:
            graph: The substituted component graph the plan was computed from.
            plan: The construction plan.
            instances: An optional registry of components built earlier; it is
                extended in place.

        Returns:
            The instance registry, containing at least every component in the plan.

        Raises:
            GraphError: If the plan names a component missing from the graph,
                or a reference has not been constructed yet.
            ConstructionError: If a component constructor fails.
        """
        instances = instances if instances is not None else InstanceRegistry()

        for name in plan.build_order:
            if name in instances:
                continue

            spec = graph.get(name)
            if spec is None:
                raise GraphError(f"Construction plan names unknown component {name!r}")

            arguments = [
                _resolve_argument(name, argument, instances)
                for argument in spec.arguments
            ]
            instances.register(name, self._component_builder.build(spec, arguments))

        logger.debug("Constructed %d components for %r", len(instances), plan.root)
        return instances


def _resolve_argument(
    name: str, argument: Argument, instances: InstanceRegistry
) -> Any:
    if not isinstance(argument, Reference):
        return argument.value
    if argument.target not in instances:
        raise GraphError(
            f"Component {name!r} references {argument.target!r}, "
            "which has not been constructed"
        )
    return instances[argument.target]
