"""Construction of a single component.

This module provides the ComponentBuilder class, which resolves a
component's type identifier and calls the resulting constructor with the
component's arguments.
"""

import logging
from typing import Any

from lightwire.domain import ComponentSpec
from lightwire.errors import ConstructionError
from lightwire.registry import TypeRegistry

__all__ = ["ComponentBuilder"]

logger = logging.getLogger(__name__)


class ComponentBuilder:
    """Build component instances from their specs."""

    def __init__(self, types: TypeRegistry):
        self._types = types

    def build(self, spec: ComponentSpec, arguments: list[Any]) -> Any:
        """Invoke a component's constructor.

        Args:
            spec: The component being constructed.
            arguments: Positional constructor arguments with every reference
                already replaced by its instance.

        Returns:
            The constructed component.

        Raises:
            ConfigurationError: If the type identifier cannot be resolved.
            ConstructionError: If the constructor raises.
        """
        factory = self._types.resolve(spec.type_id)
        logger.debug("Constructing %r with %s", spec.name, spec.type_id)
        try:
            return factory(*arguments)
        except Exception as e:
            raise ConstructionError(
                spec.name,
                f"Construction of {spec.name!r} ({spec.type_id}) failed: {e}",
            ) from e
