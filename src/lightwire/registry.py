"""Registration and lookup of component constructors by type identifier."""

import importlib
import inspect
from typing import Any, Callable, Optional

from lightwire.errors import ConfigurationError

__all__ = ["TypeRegistry", "inferred_type_id"]


def inferred_type_id(target: Any) -> str:
    """Derive a type identifier from a class or function.

    Args:
        target: The class or function to derive an identifier from.

    Returns:
        The ``module:qualname`` path of the target, which is also what
        dotted-path lookup accepts.

    Example:
        >>> inferred_type_id(Database)        # Returns "myapp.db:Database"
    """
    return f"{target.__module__}:{target.__qualname__}"


class TypeRegistry:
    """Maps type identifiers to the callables that construct components.

    Identifiers are looked up among explicit registrations first. An
    identifier that was never registered is treated as an import path,
    either ``package.module:Name`` or ``package.module.Name``.

    Example:
        >>> types = TypeRegistry()
        >>>
        >>> @types.provides("database")
        >>> class Database:
        ...     def __init__(self, dsn):
        ...         self.dsn = dsn
        >>>
        >>> types.resolve("database")                  # Database
        >>> types.resolve("collections:OrderedDict")   # imported on demand
    """

    def __init__(self, allow_imports: bool = True):
        self._factories: dict[str, Callable[..., Any]] = {}
        self._allow_imports = allow_imports

    def register(self, type_id: str, factory: Callable[..., Any]):
        """Register a constructor explicitly.

        Args:
            type_id: The identifier used in the dependency description.
            factory: A class or function called with the component's arguments.

        Raises:
            ConfigurationError: If the identifier is already registered or the
                factory is not callable.
        """
        if not callable(factory):
            raise ConfigurationError(
                f"{factory!r} registered as {type_id!r} is not callable"
            )
        if type_id in self._factories:
            raise ConfigurationError(f"Duplicate type identifier {type_id!r}")
        self._factories[type_id] = factory

    def provides(self, type_id: Optional[str] = None) -> Callable:
        """Decorator to register a class or function as a constructor.

        Args:
            type_id: Optional identifier; defaults to the target's
                ``module:qualname`` path.

        Returns:
            A decorator that registers its target and returns it unchanged.
        """
        def decorator(obj):
            if not (inspect.isclass(obj) or inspect.isfunction(obj)):
                raise ConfigurationError(f"{obj} is not a class or function")
            self.register(type_id or inferred_type_id(obj), obj)
            return obj

        return decorator

    def registered_type_ids(self) -> list[str]:
        return list(self._factories)

    def __contains__(self, type_id: str) -> bool:
        try:
            self.resolve(type_id)
        except ConfigurationError:
            return False
        return True

    def resolve(self, type_id: str) -> Callable[..., Any]:
        """Return the constructor for a type identifier.

        Raises:
            ConfigurationError: If the identifier is neither registered nor
                importable, or names something that is not callable.
        """
        if type_id in self._factories:
            return self._factories[type_id]
        if not self._allow_imports:
            raise ConfigurationError(f"Unknown type identifier {type_id!r}")

        factory = _import_path(type_id)
        if not callable(factory):
            raise ConfigurationError(
                f"Type identifier {type_id!r} does not name a callable"
            )
        return factory


def _import_path(path: str) -> Any:
    if ":" in path:
        module_name, _, attribute_path = path.partition(":")
    else:
        module_name, _, attribute_path = path.rpartition(".")
    if not module_name or not attribute_path:
        raise ConfigurationError(f"Unknown type identifier {path!r}")

    try:
        target = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(
            f"Could not import module {module_name!r} for type identifier {path!r}"
        ) from e

    for attribute in attribute_path.split("."):
        try:
            target = getattr(target, attribute)
        except AttributeError as e:
            raise ConfigurationError(
                f"Module {module_name!r} has no attribute {attribute_path!r}"
            ) from e
    return target
