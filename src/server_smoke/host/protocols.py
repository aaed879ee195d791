"""
Protocols for the game server runtime.

The harness only ever talks to the host through these capabilities, so any
engine binding (or a test double) that provides them can be smoke-tested.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class ModuleMetadata(Protocol):
    """Host-side description of a loaded module."""

    @property
    def module_id(self) -> str: ...

    @property
    def version(self) -> object:
        """Opaque version; rendered with ``str()``."""
        ...

    @property
    def display_name(self) -> str: ...


@runtime_checkable
class ServerHost(Protocol):
    """Capabilities a server runtime must expose to be smoke-tested."""

    def is_running(self) -> bool:
        """Return True while the server reports itself running."""
        ...

    def is_execution_thread_alive(self) -> bool:
        """Return True if the server's main execution thread is alive."""
        ...

    def average_tick_nanos(self) -> float:
        """Return the average tick-processing duration in nanoseconds."""
        ...

    def loaded_modules(self) -> Iterable[ModuleMetadata]:
        """Enumerate loaded modules in registry order."""
        ...

    def halt(self) -> None:
        """Stop the server gracefully. Raises on failure."""
        ...

    def execute(self, action: Callable[[], None]) -> None:
        """Queue ``action`` to run on the server's own thread. Raises if rejected."""
        ...

    def add_startup_listener(self, listener: StartupListener) -> None:
        """Register a callback fired once the server has fully started."""
        ...


@dataclass(frozen=True)
class ServerStartedEvent:
    """Delivered to startup listeners when the host finishes starting."""

    server: ServerHost | None


StartupListener = Callable[[ServerStartedEvent], None]


__all__ = ["ModuleMetadata", "ServerHost", "ServerStartedEvent", "StartupListener"]
