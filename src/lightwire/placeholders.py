"""Substitution of placeholder tokens in a component graph.

Arguments in the dependency description may be written as ``%name%`` to
take the value of the ``name`` parameter, or as one of the routing tokens
``%routedController%`` and ``%routedAction%``. Substitution only replaces
arguments that are exactly equal to a known token; any other text, including
unknown tokens, is left as it is.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from lightwire.domain import Argument, Literal, Reference, parse_argument
from lightwire.errors import ConfigurationError
from lightwire.graph import ComponentGraph

__all__ = [
    "ROUTED_CONTROLLER_PLACEHOLDER",
    "ROUTED_ACTION_PLACEHOLDER",
    "RoutedTarget",
    "PlaceholderSubstitutor",
    "placeholder_for",
]

ROUTED_CONTROLLER_PLACEHOLDER = "%routedController%"
ROUTED_ACTION_PLACEHOLDER = "%routedAction%"


def placeholder_for(key: str) -> str:
    return f"%{key}%"


@dataclass(frozen=True)
class RoutedTarget:
    """Controller component and action selected by routing."""

    controller: str
    action: str


class PlaceholderSubstitutor:
    """Rewrite placeholder arguments of a graph into concrete values."""

    def check_required_placeholders(self, raw_text: str, entry_point: str):
        """Fail fast if the raw dependency description cannot be wired.

        Args:
            raw_text: The dependency description, before parsing.
            entry_point: Name of the configured application entry point.

        Raises:
            ConfigurationError: If either routing token or the entry-point name
                does not occur in ``raw_text``.
        """
        if (
            ROUTED_CONTROLLER_PLACEHOLDER not in raw_text
            or ROUTED_ACTION_PLACEHOLDER not in raw_text
        ):
            raise ConfigurationError(
                f"Could not find {ROUTED_CONTROLLER_PLACEHOLDER} placeholder or "
                f"{ROUTED_ACTION_PLACEHOLDER} placeholder in the dependency "
                "description, make sure you set these values as dependencies of the "
                "component responsible for handling them"
            )

        if entry_point not in raw_text:
            raise ConfigurationError(
                f"Could not find application entry point {entry_point!r} in the "
                "dependency description, make sure you specify it as one of the "
                "dependencies"
            )

    def substitute(
        self,
        graph: ComponentGraph,
        parameters: Mapping[str, Any],
        routed: Optional[RoutedTarget] = None,
    ) -> ComponentGraph:
        """Return a copy of ``graph`` with every known placeholder replaced.

        Parameter values that are strings starting with ``@`` become
        references, like any other argument written that way. The routed
        controller always becomes a reference, the routed action a literal.

        Args:
            graph: The parsed graph; it is not modified.
            parameters: Concrete parameter values keyed by parameter name.
            routed: The routing selection, in application mode only.

        Returns:
            A new ComponentGraph.
        """
        replacements = self.replacements(parameters, routed)
        return ComponentGraph(
            {
                name: spec.with_arguments(
                    tuple(
                        _replace(argument, replacements)
                        for argument in spec.arguments
                    )
                )
                for name, spec in graph.specs_by_name.items()
            }
        )

    def replacements(
        self, parameters: Mapping[str, Any], routed: Optional[RoutedTarget] = None
    ) -> dict[str, Argument]:
        """Map each known placeholder token to the argument replacing it."""
        replacements: dict[str, Argument] = {}
        if routed is not None:
            replacements[ROUTED_CONTROLLER_PLACEHOLDER] = Reference(routed.controller)
            replacements[ROUTED_ACTION_PLACEHOLDER] = Literal(routed.action)

        for key, value in parameters.items():
            replacements[placeholder_for(key)] = parse_argument(value)

        return replacements


def _replace(argument: Argument, replacements: dict[str, Argument]) -> Argument:
    if isinstance(argument, Literal) and isinstance(argument.value, str):
        return replacements.get(argument.value, argument)
    return argument
