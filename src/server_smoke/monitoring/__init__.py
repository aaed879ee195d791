"""Server telemetry collection."""

from server_smoke.monitoring.telemetry import (
    TelemetryCollector,
    average_tick_millis,
    calculate_tps,
)

__all__ = ["TelemetryCollector", "average_tick_millis", "calculate_tps"]
