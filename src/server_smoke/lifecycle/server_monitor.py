"""
Server startup monitor.

Listens for the host's startup-complete signal, confirms the server is really
running, then drives telemetry collection and shutdown exactly once.

The host delivers startup events serially, but the executed flag is still
checked and set under a lock so a second delivery from another thread can never
start a second test sequence.
"""

from __future__ import annotations

import threading

from server_smoke.environment.detector import EnvironmentDetector
from server_smoke.errors import ErrorHandler, ErrorType
from server_smoke.host.protocols import ServerHost, ServerStartedEvent
from server_smoke.lifecycle.shutdown import ShutdownManager
from server_smoke.monitoring.telemetry import COLLECTION_FAILED_MESSAGE, TelemetryCollector
from server_smoke.utilities.logging_patterns import get_logger

logger = get_logger(__name__, component="server_monitor")


class ServerMonitor:
    """Coordinates the one-shot test sequence: Idle -> Executed."""

    def __init__(
        self,
        environment_detector: EnvironmentDetector,
        telemetry_collector: TelemetryCollector,
        shutdown_manager: ShutdownManager,
        error_handler: ErrorHandler,
    ) -> None:
        self._environment_detector = environment_detector
        self._telemetry_collector = telemetry_collector
        self._shutdown_manager = shutdown_manager
        self._error_handler = error_handler
        self._lock = threading.Lock()
        self._executed = False

        logger.info("ServerMonitor initialized")

    @property
    def test_sequence_executed(self) -> bool:
        with self._lock:
            return self._executed

    def reset_test_sequence_flag(self) -> None:
        """Return to Idle. Test support only."""
        with self._lock:
            self._executed = False

    def _try_mark_executed(self) -> bool:
        with self._lock:
            if self._executed:
                return False
            self._executed = True
            return True

    def on_server_started(self, event: ServerStartedEvent) -> None:
        """Startup listener registered with the host."""
        if self.test_sequence_executed:
            logger.warning("Test sequence already executed, ignoring duplicate event")
            return

        try:
            logger.info("Server started event received - server startup completed")
            logger.info(f"Environment: {self._environment_detector.describe_environment()}")

            server = event.server
            if server is None:
                self._shutdown_manager.emergency_shutdown("server started event carried no server")
                return

            if not self._is_server_ready(server):
                self._error_handler.report_fatal(
                    ErrorType.SERVER_STARTUP,
                    "Server not ready despite server started event",
                )
                return

            # Set before running so re-entrant delivery counts as a duplicate.
            if not self._try_mark_executed():
                logger.warning("Test sequence already executed, ignoring duplicate event")
                return
        except Exception as exc:
            self._error_handler.report_fatal(
                ErrorType.SERVER_STARTUP, "Error during test sequence", exc
            )
            return

        logger.info("Server readiness confirmed, beginning test sequence")
        self._execute_test_sequence(server)

    def _is_server_ready(self, server: ServerHost) -> bool:
        try:
            if not server.is_running():
                logger.warning("Server is not running")
                return False

            if not server.is_execution_thread_alive():
                logger.warning("Server thread is not alive")
                return False

            logger.debug("Server readiness checks passed")
            return True
        except Exception as exc:
            logger.error(f"Error checking server readiness: {exc}")
            return False

    def _execute_test_sequence(self, server: ServerHost) -> None:
        logger.info("Starting information collection...")

        try:
            self._telemetry_collector.collect_and_report(server)
        except Exception as exc:
            self._error_handler.report_fatal(
                ErrorType.INFO_COLLECTION, COLLECTION_FAILED_MESSAGE, exc
            )
            return

        logger.info("Information collection completed successfully")
        self._shutdown_manager.schedule_shutdown(server)


__all__ = ["ServerMonitor"]
