"""Scriptable ServerHost double for unit tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from server_smoke.host.protocols import ServerStartedEvent, StartupListener


@dataclass(frozen=True)
class FakeModule:
    module_id: str
    version: str
    display_name: str


class FakeServerHost:
    def __init__(
        self,
        *,
        running: bool = True,
        thread_alive: bool = True,
        avg_tick_nanos: float = 50_000_000.0,
        modules: Sequence[FakeModule] = (),
        readiness_error: Exception | None = None,
        tick_error: Exception | None = None,
        halt_error: Exception | None = None,
        execute_error: Exception | None = None,
        run_actions: bool = True,
    ) -> None:
        self.running = running
        self.thread_alive = thread_alive
        self.avg_tick_nanos = avg_tick_nanos
        self.modules = list(modules)
        self.readiness_error = readiness_error
        self.tick_error = tick_error
        self.halt_error = halt_error
        self.execute_error = execute_error
        self.run_actions = run_actions

        self.halt_calls = 0
        self.scheduled: list[Callable[[], None]] = []
        self.listeners: list[StartupListener] = []

    def is_running(self) -> bool:
        if self.readiness_error is not None:
            raise self.readiness_error
        return self.running

    def is_execution_thread_alive(self) -> bool:
        return self.thread_alive

    def average_tick_nanos(self) -> float:
        if self.tick_error is not None:
            raise self.tick_error
        return self.avg_tick_nanos

    def loaded_modules(self) -> list[FakeModule]:
        return list(self.modules)

    def halt(self) -> None:
        self.halt_calls += 1
        if self.halt_error is not None:
            raise self.halt_error

    def execute(self, action: Callable[[], None]) -> None:
        if self.execute_error is not None:
            raise self.execute_error
        self.scheduled.append(action)
        if self.run_actions:
            action()

    def add_startup_listener(self, listener: StartupListener) -> None:
        self.listeners.append(listener)

    def fire_started(self) -> None:
        event = ServerStartedEvent(server=self)
        for listener in list(self.listeners):
            listener(event)
