"""High level entry points for computing plans and building components."""

from typing import Optional

from lightwire.analysis import DEFAULT_VISIT_LIMIT, ConstructionPlan, GraphAnalyzer
from lightwire.component_builder import ComponentBuilder
from lightwire.factory import ObjectFactory
from lightwire.graph import ComponentGraph
from lightwire.instances import InstanceRegistry
from lightwire.registry import TypeRegistry

__all__ = ["make_plan", "make_instances"]


def make_plan(
    graph: ComponentGraph, root: str, visit_limit: int = DEFAULT_VISIT_LIMIT
) -> ConstructionPlan:
    """Create a :class:`ConstructionPlan` for ``root``.

    Args:
        graph: The substituted component graph.
        root: Name of the component to build.
        visit_limit: Bound on analyzer visits before giving up.

    Returns:
        The plan; its ``build_order`` lists the components to construct.

    Raises:
        GraphError: If a component is missing or the visit limit is exceeded.

    Example:
        >>> plan = make_plan(graph, "app")
        >>> print(plan.build_order)
    """
    return GraphAnalyzer(visit_limit).compute_order(graph, root)


def make_instances(
    graph: ComponentGraph,
    root: str,
    types: Optional[TypeRegistry] = None,
    instances: Optional[InstanceRegistry] = None,
) -> InstanceRegistry:
    """Construct ``root`` and everything it references.

    Args:
        graph: The substituted component graph.
        root: Name of the component to build.
        types: Registry resolving type identifiers; by default identifiers
            are imported as dotted paths.
        instances: Optional registry of components built earlier, reused
            instead of being constructed again.

    Returns:
        The instance registry holding ``root`` and its references.

    Raises:
        GraphError: If the graph cannot be resolved.
        ConfigurationError: If a type identifier cannot be resolved.
        ConstructionError: If a constructor fails.
    """
    plan = make_plan(graph, root)
    factory = ObjectFactory(ComponentBuilder(types or TypeRegistry()))
    return factory.build(graph, plan, instances)
