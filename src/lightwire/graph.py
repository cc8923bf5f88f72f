"""Helpers for building component graphs.

This module turns the raw dependency description (a JSON object mapping
component names to ``{"class": ..., "inject": [...]}`` entries) into a
validated ComponentGraph. Reference targets are not checked here; a
missing target is reported by the analyzer when it is first visited.
"""

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from lightwire.domain import ComponentSpec, parse_argument
from lightwire.errors import ConfigurationError

__all__ = ["ComponentGraph", "make_component_graph", "parse_component_graph"]

CLASS_KEY = "class"
INJECT_KEY = "inject"


@dataclass(frozen=True)
class ComponentGraph:
    """
    Mapping from component name to ComponentSpec.

    Attributes:
        specs_by_name: The component specs, keyed by their unique name.
    """

    specs_by_name: dict[str, ComponentSpec]

    def __getitem__(self, name: str) -> ComponentSpec:
        return self.specs_by_name[name]

    def __contains__(self, name: object) -> bool:
        return name in self.specs_by_name

    def __iter__(self) -> Iterator[str]:
        return iter(self.specs_by_name)

    def __len__(self) -> int:
        return len(self.specs_by_name)

    def get(self, name: str) -> Optional[ComponentSpec]:
        return self.specs_by_name.get(name)


def parse_component_graph(text: str) -> ComponentGraph:
    """Parse a JSON dependency description into a ComponentGraph.

    Args:
        text: The raw JSON text.

    Returns:
        The parsed graph.

    Raises:
        ConfigurationError: If the text is not valid JSON, repeats a key, or
            describes a component incorrectly.
    """
    try:
        raw = json.loads(text, object_pairs_hook=_unique_keys)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Malformed dependency description: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Dependency description must be a JSON object, got {type(raw).__name__}"
        )
    return make_component_graph(raw)


def make_component_graph(raw: Mapping[str, Any]) -> ComponentGraph:
    """
    Constructs a ComponentGraph from a mapping of raw component descriptions.

    Validates that:
      - Each description is an object with a non-empty string ``class``.
      - ``inject``, where present, is a list.

    Args:
        raw: Mapping from component name to its raw description.

    Returns:
        A ComponentGraph whose argument lists have been classified into
        Literal and Reference values.

    Raises:
        ConfigurationError: If any description is malformed.
    """
    return ComponentGraph(
        {name: _make_spec(name, description) for name, description in raw.items()}
    )


def _make_spec(name: str, description: Any) -> ComponentSpec:
    if not isinstance(description, Mapping):
        raise ConfigurationError(
            f"Component {name!r} must be described by an object, got {description!r}"
        )

    type_id = description.get(CLASS_KEY)
    if not isinstance(type_id, str) or not type_id:
        raise ConfigurationError(
            f"Component {name!r} has no {CLASS_KEY!r} entry naming its type"
        )

    inject = description.get(INJECT_KEY, [])
    if not isinstance(inject, list):
        raise ConfigurationError(
            f"Component {name!r} has a non-list {INJECT_KEY!r} entry: {inject!r}"
        )

    return ComponentSpec(name, type_id, tuple(parse_argument(raw) for raw in inject))


def _unique_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    result = {}
    for key, value in pairs:
        if key in result:
            raise ConfigurationError(
                f"Duplicate key {key!r} in dependency description"
            )
        result[key] = value
    return result
