from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ModuleInfo:
    """A module loaded by the host, as reported by its registry."""

    module_id: str
    version: str
    display_name: str

    def __str__(self) -> str:
        return f"{self.display_name} ({self.version}) - {self.module_id}"


@dataclass(frozen=True, slots=True)
class TelemetryReport:
    """Outcome of one telemetry pass.

    ``loaded_modules`` keeps the host's enumeration order. ``error_message`` is
    set exactly when ``success`` is False.
    """

    tps: float
    tick_time_ms: int
    loaded_modules: tuple[ModuleInfo, ...] = field(default_factory=tuple)
    success: bool = True
    error_message: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.loaded_modules, tuple):
            object.__setattr__(self, "loaded_modules", tuple(self.loaded_modules))
        if self.success and self.error_message is not None:
            raise ValueError("successful TelemetryReport cannot carry an error_message")
        if not self.success and self.error_message is None:
            raise ValueError("failed TelemetryReport requires an error_message")

    @classmethod
    def succeeded(
        cls, tps: float, tick_time_ms: int, loaded_modules: Iterable[ModuleInfo]
    ) -> TelemetryReport:
        return cls(tps=tps, tick_time_ms=tick_time_ms, loaded_modules=tuple(loaded_modules))

    @classmethod
    def failure(cls, message: str) -> TelemetryReport:
        return cls(tps=0.0, tick_time_ms=0, loaded_modules=(), success=False, error_message=message)

    @property
    def module_count(self) -> int:
        return len(self.loaded_modules)

    def __str__(self) -> str:
        if self.success:
            return (
                f"TelemetryReport{{tps={self.tps:.1f}, tickTimeMs={self.tick_time_ms}ms, "
                f"modsLoaded={self.module_count}}}"
            )
        return f"TelemetryReport{{failed, error='{self.error_message}'}}"


__all__ = ["ModuleInfo", "TelemetryReport"]
