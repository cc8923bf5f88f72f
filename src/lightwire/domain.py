"""Domain models used throughout the framework."""

from dataclasses import dataclass
from typing import Any, Union

__all__ = [
    "Literal",
    "Reference",
    "Argument",
    "ComponentSpec",
    "CommandResult",
    "REFERENCE_MARKER",
    "parse_argument",
]

REFERENCE_MARKER = "@"


@dataclass(frozen=True)
class Literal:
    """A constructor argument passed to the component as-is.

    Attributes:
        value: Any JSON value (string, number, boolean, null, list or object).
    """

    value: Any


@dataclass(frozen=True)
class Reference:
    """A constructor argument naming another component.

    Attributes:
        target: The name of the component whose instance is injected.
    """

    target: str


Argument = Union[Literal, Reference]


@dataclass(frozen=True)
class ComponentSpec:
    """
    Declarative description of one named component.

    Attributes:
        name: Unique name of the component within its graph.
        type_id: Identifier resolved to a constructor by a TypeRegistry.
        arguments: Constructor arguments, in positional order.
    """

    name: str
    type_id: str
    arguments: tuple[Argument, ...] = ()

    @property
    def references(self) -> list[str]:
        """Names of referenced components, in argument order."""
        return [
            argument.target
            for argument in self.arguments
            if isinstance(argument, Reference)
        ]

    def with_arguments(self, arguments: tuple[Argument, ...]) -> "ComponentSpec":
        return ComponentSpec(self.name, self.type_id, arguments)


@dataclass(frozen=True)
class CommandResult:
    """Outcome reported by a command component.

    Attributes:
        status: True if the command succeeded.
        message: Human readable description of the outcome.
    """

    status: bool
    message: str


def parse_argument(raw: Any) -> Argument:
    """Classify a raw argument as a Reference or a Literal.

    Strings starting with ``@`` are references; surrounding ``@`` markers are
    stripped from the target name. Everything else is a literal.

    Example:
        >>> parse_argument("@database")    # Reference("database")
        >>> parse_argument("@database@")   # Reference("database")
        >>> parse_argument("database")     # Literal("database")
        >>> parse_argument(42)             # Literal(42)
    """
    if isinstance(raw, str) and raw.startswith(REFERENCE_MARKER):
        return Reference(raw.strip(REFERENCE_MARKER))
    return Literal(raw)
