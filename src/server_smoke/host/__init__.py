"""Host runtime capabilities the harness observes and controls."""

from server_smoke.host.protocols import (
    ModuleMetadata,
    ServerHost,
    ServerStartedEvent,
    StartupListener,
)
from server_smoke.host.threaded import LoadedModule, ThreadedServerHost

__all__ = [
    "LoadedModule",
    "ModuleMetadata",
    "ServerHost",
    "ServerStartedEvent",
    "StartupListener",
    "ThreadedServerHost",
]
