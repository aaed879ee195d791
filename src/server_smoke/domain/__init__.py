"""Immutable value types produced by a smoke-test run."""

from server_smoke.domain.models import ModuleInfo, TelemetryReport

__all__ = ["ModuleInfo", "TelemetryReport"]
