"""Stops the host once testing is complete and exits with the run's status."""

from __future__ import annotations

from server_smoke.errors import ErrorHandler, ErrorType
from server_smoke.host.protocols import ServerHost
from server_smoke.utilities.logging_patterns import get_logger

logger = get_logger(__name__, component="shutdown")


class ShutdownManager:
    def __init__(self, error_handler: ErrorHandler) -> None:
        self._error_handler = error_handler

    def schedule_shutdown(self, server: ServerHost) -> None:
        """Queue the stop-and-exit on the server's own thread.

        The host only accepts lifecycle changes from its execution thread, so
        nothing is stopped synchronously here.
        """
        logger.info("Scheduling server shutdown...")
        try:
            server.execute(lambda: self._run_shutdown(server))
        except Exception as exc:
            self._error_handler.report_fatal(ErrorType.SHUTDOWN, "Error scheduling shutdown", exc)

    def emergency_shutdown(self, reason: str) -> None:
        """Exit without touching the host."""
        self._error_handler.report_fatal(
            ErrorType.GENERAL, f"Emergency shutdown triggered: {reason}"
        )

    def _run_shutdown(self, server: ServerHost) -> None:
        try:
            self._perform_shutdown(server)
        except Exception as exc:
            self._error_handler.report_fatal(ErrorType.SHUTDOWN, "Error during shutdown", exc)

    def _perform_shutdown(self, server: ServerHost) -> None:
        logger.info("Initiating server shutdown...")
        try:
            server.halt()
        except Exception as exc:
            self._error_handler.report_recoverable(
                ErrorType.SHUTDOWN,
                "Failed to shutdown server gracefully, attempting force shutdown",
                exc,
            )
            self._error_handler.report_fatal(ErrorType.SHUTDOWN, "Forcing exit after failed shutdown")
            return

        self._error_handler.report_success("Server shutdown completed successfully")


__all__ = ["ShutdownManager"]
