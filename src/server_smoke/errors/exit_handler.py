"""Process termination seam.

Business logic never exits directly; it asks an ``ExitHandler``. Production uses
``SystemExitHandler``, tests use ``RecordingExitHandler`` and keep running.
"""

from __future__ import annotations

import logging
import os
import threading
from typing import Protocol, runtime_checkable


@runtime_checkable
class ExitHandler(Protocol):
    """Protocol for terminating the process with a status code."""

    def exit(self, status_code: int) -> None:
        """Terminate the process with ``status_code``."""


class SystemExitHandler:
    """Terminates the whole process, whichever thread calls it.

    ``sys.exit`` only unwinds the calling thread, and shutdown normally runs on
    the host's server thread, so logging is flushed and ``os._exit`` is used.
    """

    def exit(self, status_code: int) -> None:
        logging.shutdown()
        os._exit(status_code)


class RecordingExitHandler:
    """Captures exit requests instead of terminating."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.codes: list[int] = []
        self.exited = threading.Event()

    def exit(self, status_code: int) -> None:
        with self._lock:
            self.codes.append(status_code)
        self.exited.set()

    @property
    def called(self) -> bool:
        return bool(self.codes)

    @property
    def last_code(self) -> int | None:
        return self.codes[-1] if self.codes else None

    def wait(self, timeout: float | None = None) -> bool:
        """Block until at least one exit was requested."""
        return self.exited.wait(timeout)

    def reset(self) -> None:
        with self._lock:
            self.codes.clear()
        self.exited.clear()


__all__ = ["ExitHandler", "RecordingExitHandler", "SystemExitHandler"]
