"""Host lifecycle coordination: startup monitoring and shutdown."""

from server_smoke.lifecycle.server_monitor import ServerMonitor
from server_smoke.lifecycle.shutdown import ShutdownManager

__all__ = ["ServerMonitor", "ShutdownManager"]
