"""Construction order analysis for component graphs.

This module computes the order in which components have to be built so
that every component is constructed after everything it references. It is
not a textbook topological sort: components are appended to the order as
they are visited, and a component reached again through another path is
moved to the end. Reading the resulting order backwards gives a valid
construction sequence, including for diamond-shaped graphs.

Cycles are not detected explicitly. Instead every visit increments a
counter, and the analysis gives up once the counter passes a fixed bound.
A cyclic graph therefore fails with a GraphError once it has been walked
round often enough, as does a graph that is simply too large.
"""

import logging
from dataclasses import dataclass

from lightwire.errors import GraphError
from lightwire.graph import ComponentGraph

__all__ = ["ConstructionPlan", "GraphAnalyzer", "DEFAULT_VISIT_LIMIT"]

logger = logging.getLogger(__name__)

DEFAULT_VISIT_LIMIT = 1000


@dataclass(frozen=True)
class ConstructionPlan:
    """Description of how to build the components needed by a root."""

    root: str
    """Name of the component the plan was computed for."""

    order: tuple[str, ...]
    """Duplicate-free visit order; every component precedes its references."""

    @property
    def build_order(self) -> tuple[str, ...]:
        """Components in the order they have to be constructed."""
        return tuple(reversed(self.order))

    def __contains__(self, name: object) -> bool:
        return name in self.order

    def __len__(self) -> int:
        return len(self.order)


class GraphAnalyzer:
    """Compute construction plans for a component graph.

    Args:
        visit_limit: Maximum number of visits before the graph is assumed to
            be cyclic or oversized.
    """

    def __init__(self, visit_limit: int = DEFAULT_VISIT_LIMIT):
        self._visit_limit = visit_limit

    def compute_order(self, graph: ComponentGraph, root: str) -> ConstructionPlan:
        """
        Visit the graph depth first from ``root`` and record the visit order.

        Visiting a component moves it to the end of the order (appending it
        if it is new) and then visits each of its references in argument
        order. The visit is iterative but reproduces the recursive
        pre-order exactly.

        Args:
            graph: The fully substituted component graph.
            root: Name of the component to build.

        Returns:
            A ConstructionPlan rooted at ``root``.

        Raises:
            GraphError: If ``root`` or any referenced component is missing
                from the graph, or if the visit limit is exceeded.
        """
        order: list[str] = []
        visits = 0
        pending = [root]

        while pending:
            name = pending.pop()

            visits += 1
            if visits > self._visit_limit:
                raise GraphError(
                    f"Too many dependencies or danger of infinite recurrence, "
                    f"reached counter {visits} while visiting {name!r}"
                )

            spec = graph.get(name)
            if spec is None:
                raise GraphError(f"Unrecognized dependency {name!r}")

            if name in order:
                order.remove(name)
            order.append(name)

            pending.extend(reversed(spec.references))

        logger.debug(
            "Construction order for %r after %d visits: %s", root, visits, order
        )
        return ConstructionPlan(root, tuple(order))
