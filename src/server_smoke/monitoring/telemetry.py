"""
Server telemetry: tick performance and the loaded module inventory.

The host targets 20 ticks per second (50 ms per tick), so TPS is derived from
the average tick duration and capped at 20.
"""

from __future__ import annotations

import math

from server_smoke.domain.models import ModuleInfo, TelemetryReport
from server_smoke.errors import ErrorHandler, ErrorType, TelemetryCollectionError
from server_smoke.host.protocols import ServerHost
from server_smoke.utilities.logging_patterns import get_logger

logger = get_logger(__name__, component="telemetry")

NANOS_PER_SECOND = 1_000_000_000.0
NANOS_PER_MILLI = 1_000_000
MAX_TPS = 20.0

COLLECTION_FAILED_MESSAGE = "Failed to collect server information"


def _require_positive_tick(avg_tick_nanos: float) -> float:
    if not math.isfinite(avg_tick_nanos) or avg_tick_nanos <= 0:
        raise ValueError(
            f"Average tick time must be a positive number of nanoseconds, got {avg_tick_nanos}"
        )
    return avg_tick_nanos


def calculate_tps(avg_tick_nanos: float) -> float:
    """Convert an average tick duration to ticks per second, capped at ``MAX_TPS``."""
    return min(NANOS_PER_SECOND / _require_positive_tick(avg_tick_nanos), MAX_TPS)


def average_tick_millis(avg_tick_nanos: float) -> int:
    """Truncate an average tick duration to whole milliseconds."""
    return int(_require_positive_tick(avg_tick_nanos) // NANOS_PER_MILLI)


class TelemetryCollector:
    """Reads host telemetry, logs it, and reports collection failures."""

    def __init__(self, error_handler: ErrorHandler) -> None:
        self._error_handler = error_handler

    def collect_and_report(self, server: ServerHost | None) -> TelemetryReport:
        """Collect TPS, tick time and modules from ``server`` and log the report.

        Raises:
            TelemetryCollectionError: if any step fails, after a recoverable
                report and a logged failure report. The original error is
                chained as ``__cause__``.
        """
        try:
            avg_tick_nanos = float(server.average_tick_nanos())  # type: ignore[union-attr]
            report = TelemetryReport.succeeded(
                tps=calculate_tps(avg_tick_nanos),
                tick_time_ms=average_tick_millis(avg_tick_nanos),
                loaded_modules=self._collect_modules(server),  # type: ignore[arg-type]
            )
        except Exception as exc:
            self._error_handler.report_recoverable(
                ErrorType.INFO_COLLECTION,
                "Error collecting server information",
                exc,
            )
            self._output(TelemetryReport.failure(str(exc) or type(exc).__name__))
            error = TelemetryCollectionError(
                COLLECTION_FAILED_MESSAGE,
                context={"server_present": server is not None, "cause_type": type(exc).__name__},
                original_error=exc,
            )
            logger.debug("Collection failure details", error_details=error.to_dict())
            raise error from exc

        self._output(report)
        return report

    @staticmethod
    def _collect_modules(server: ServerHost) -> list[ModuleInfo]:
        return [
            ModuleInfo(
                module_id=module.module_id,
                version=str(module.version),
                display_name=module.display_name,
            )
            for module in server.loaded_modules()
        ]

    @staticmethod
    def _output(report: TelemetryReport) -> None:
        if not report.success:
            logger.error(f"Test failed: {report.error_message}", success=False)
            return

        logger.info(
            f"TPS: {report.tps:.1f} (Average tick time: {report.tick_time_ms}ms)",
            tps=round(report.tps, 1),
            tick_time_ms=report.tick_time_ms,
        )
        logger.info(f"Loaded Mods ({report.module_count} total):", module_count=report.module_count)
        for module in report.loaded_modules:
            logger.info(f"- {module.display_name} ({module.version})", module_id=module.module_id)


__all__ = [
    "COLLECTION_FAILED_MESSAGE",
    "MAX_TPS",
    "TelemetryCollector",
    "average_tick_millis",
    "calculate_tps",
]
