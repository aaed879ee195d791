"""CI smoke-test harness for game server runtimes.

Waits for the host server to report that it has started, verifies it is really
running, logs tick performance and the loaded module inventory, then shuts the
host down and exits with a status code a pipeline can act on.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
