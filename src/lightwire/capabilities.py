"""Interfaces between the bootstrap and the components it hands control to.

Routing is performed by an external Router; the entry-point component
picked by the bootstrap has to be a RequestHandler in application mode and
a Command in command mode. Conformance is checked structurally, where the
root instance is consumed, so components need not inherit from anything.
"""

from typing import Any, Protocol, runtime_checkable

from lightwire.domain import CommandResult
from lightwire.errors import CapabilityError

__all__ = [
    "Request",
    "Router",
    "RequestHandler",
    "Command",
    "require_request_handler",
    "require_command",
    "require_command_result",
]


@runtime_checkable
class Request(Protocol):
    def get_controller(self) -> str: ...

    def get_action(self) -> str: ...


@runtime_checkable
class Router(Protocol):
    def build_request(self) -> Request: ...


@runtime_checkable
class RequestHandler(Protocol):
    """Application entry point, invoked once with the inbound request."""

    def process(self, request: Request) -> Any: ...


@runtime_checkable
class Command(Protocol):
    """Command-mode entry point."""

    def execute(self) -> CommandResult: ...


def require_request_handler(name: str, instance: Any) -> RequestHandler:
    if not isinstance(instance, RequestHandler) or not callable(instance.process):
        raise CapabilityError(
            f"Application entry point {name!r} has to implement "
            f"{RequestHandler.__name__}.process, got {type(instance).__name__}"
        )
    return instance


def require_command(name: str, instance: Any) -> Command:
    if not isinstance(instance, Command) or not callable(instance.execute):
        raise CapabilityError(
            f"Command {name!r} has to implement {Command.__name__}.execute, "
            f"got {type(instance).__name__}"
        )
    return instance


def require_command_result(name: str, result: Any) -> CommandResult:
    if not isinstance(result, CommandResult):
        raise CapabilityError(
            f"Command {name!r} has to return a {CommandResult.__name__}, got {result!r}"
        )
    return result
