"""Exceptions raised while bootstrapping a component graph.

Every failure in the bootstrap pipeline is fatal: nothing here is retried,
and each error propagates to the process boundary.
"""

__all__ = [
    "LightwireError",
    "ConfigurationError",
    "GraphError",
    "CapabilityError",
    "ConstructionError",
]


class LightwireError(Exception):
    """Base class for all bootstrap failures."""

    pass


class ConfigurationError(LightwireError):
    """Raised when a configuration source is missing, malformed or incomplete."""

    pass


class GraphError(LightwireError):
    """Raised when the component graph cannot be resolved.

    Covers unknown component names, an unresolvable root and graphs that
    exceed the analyzer's visit bound.
    """

    pass


class CapabilityError(LightwireError):
    """Raised when an entry-point component lacks the capability its mode requires."""

    pass


class ConstructionError(LightwireError):
    """Raised when a component's constructor fails.

    The constructor's own exception is chained as ``__cause__``.
    """

    def __init__(self, component_name: str, message: str):
        super().__init__(message)
        self.component_name = component_name
