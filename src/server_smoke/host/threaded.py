"""
Reference host: a fixed-rate tick loop on a dedicated thread.

Lets the full harness run end to end without a game engine. Work queued through
``execute`` runs on the server thread between ticks, the same contract a real
engine gives its plugins.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections import deque
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from server_smoke.errors import RejectedExecutionError
from server_smoke.host.protocols import ServerStartedEvent, StartupListener

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedModule:
    """Module metadata as the reference host's registry reports it."""

    module_id: str
    version: str
    display_name: str


class ThreadedServerHost:
    """
    In-process server runtime used for local runs and integration tests.

    Usage:
        host = ThreadedServerHost(modules=[LoadedModule("core", "1.0", "Core")])
        container.install(host)
        host.start()
        host.join()
    """

    def __init__(
        self,
        modules: Sequence[LoadedModule] = (),
        *,
        tick_interval: float = 0.05,
        tick_workload: Callable[[], None] | None = None,
        window: int = 100,
        thread_name: str = "server-thread",
    ) -> None:
        self._modules = tuple(modules)
        self._tick_interval = tick_interval
        self._tick_workload = tick_workload
        self._tick_durations: deque[int] = deque(maxlen=window)
        self._durations_lock = threading.Lock()
        self._actions: queue.Queue[Callable[[], None]] = queue.Queue()
        self._dispatch_lock = threading.Lock()
        self._listeners: list[StartupListener] = []
        self._listeners_lock = threading.Lock()
        self._stop_requested = threading.Event()
        self._started = threading.Event()
        self._accepting = False
        self._running = False
        self._thread = threading.Thread(target=self._run, name=thread_name, daemon=True)

    # ----- ServerHost -------------------------------------------------------
    def is_running(self) -> bool:
        return self._running

    def is_execution_thread_alive(self) -> bool:
        return self._thread.is_alive()

    def average_tick_nanos(self) -> float:
        with self._durations_lock:
            if not self._tick_durations:
                return 0.0
            return sum(self._tick_durations) / len(self._tick_durations)

    def loaded_modules(self) -> Iterable[LoadedModule]:
        return self._modules

    def halt(self) -> None:
        logger.info("Halt requested")
        self._running = False
        self._stop_requested.set()

    def execute(self, action: Callable[[], None]) -> None:
        with self._dispatch_lock:
            if not self._accepting:
                raise RejectedExecutionError("Server thread is not accepting work")
            self._actions.put(action)

    def add_startup_listener(self, listener: StartupListener) -> None:
        with self._listeners_lock:
            self._listeners.append(listener)
        if self._started.is_set():
            self.execute(lambda: listener(ServerStartedEvent(server=self)))

    # ----- Process control --------------------------------------------------
    def start(self) -> None:
        self._accepting = True
        self._running = True
        self._thread.start()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the server thread to finish. Returns True if it did."""
        if self._thread.ident is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _run(self) -> None:
        logger.info("Server thread started")
        try:
            while not self._stop_requested.is_set():
                started_ns = time.perf_counter_ns()
                if self._tick_workload is not None:
                    self._tick_workload()
                elapsed_ns = time.perf_counter_ns() - started_ns
                with self._durations_lock:
                    self._tick_durations.append(max(elapsed_ns, 1))

                if not self._started.is_set():
                    self._started.set()
                    self._fire_startup()

                self._drain_actions()

                remaining = self._tick_interval - (time.perf_counter_ns() - started_ns) / 1e9
                if remaining > 0:
                    self._stop_requested.wait(remaining)
        finally:
            # Nothing can be queued after this point, so the final drain sees every action.
            with self._dispatch_lock:
                self._accepting = False
            self._running = False
            self._drain_actions()
            logger.info("Server thread stopped")

    def _fire_startup(self) -> None:
        with self._listeners_lock:
            listeners = list(self._listeners)
        event = ServerStartedEvent(server=self)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Startup listener failed")

    def _drain_actions(self) -> None:
        while True:
            try:
                action = self._actions.get_nowait()
            except queue.Empty:
                return
            try:
                action()
            except Exception:
                logger.exception("Scheduled server action failed")


__all__ = ["LoadedModule", "ThreadedServerHost"]
