"""Write-once container for constructed components.

The registry is filled by the ObjectFactory while it walks a construction
plan. A name is bound at most once, so asking for a component that is
already present always yields the instance built the first time.
"""

from typing import Any, Iterator, Optional

from lightwire.errors import GraphError

__all__ = ["InstanceRegistry"]


class InstanceRegistry:
    """Collection of constructed components keyed by component name.

    Example:
        >>> instances = InstanceRegistry()
        >>> instances.register("db", db)
        >>> instances["db"] is db          # True
        >>> instances.register("db", other)  # raises GraphError
    """

    def __init__(self, instances: Optional[dict[str, Any]] = None):
        self._instances: dict[str, Any] = {}
        for name, instance in (instances or {}).items():
            self.register(name, instance)

    def register(self, name: str, instance: Any):
        if name in self._instances:
            raise GraphError(f"Component {name!r} has already been constructed")
        self._instances[name] = instance

    def names(self) -> list[str]:
        """Names in the order their components were constructed."""
        return list(self._instances)

    def __getitem__(self, name: str) -> Any:
        return self._instances[name]

    def __contains__(self, name: object) -> bool:
        return name in self._instances

    def __iter__(self) -> Iterator[str]:
        return iter(self._instances)

    def __len__(self) -> int:
        return len(self._instances)
