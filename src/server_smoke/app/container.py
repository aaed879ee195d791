from __future__ import annotations

import sys
import threading
from types import TracebackType
from typing import Any

from server_smoke.environment.detector import EnvironmentDetector
from server_smoke.environment.provider import EnvironmentProvider, SystemEnvironmentProvider
from server_smoke.errors import ErrorHandler, ErrorType, ExitHandler, SystemExitHandler
from server_smoke.host.protocols import ServerHost
from server_smoke.lifecycle.server_monitor import ServerMonitor
from server_smoke.lifecycle.shutdown import ShutdownManager
from server_smoke.logging.setup import configure_logging
from server_smoke.monitoring.telemetry import TelemetryCollector
from server_smoke.settings import Settings, get_settings
from server_smoke.utilities.logging_patterns import get_logger

logger = get_logger(__name__, component="container")


class SmokeTestContainer:
    """
    Composition root for the smoke-test harness.

    Lazily builds each component once and hands it its collaborators. Only the
    error handler, environment provider and exit handler are injectable; the rest
    is derived from them.

    Usage:
        container = SmokeTestContainer(settings)
        container.install(server)  # registers the startup listener when in CI
    """

    def __init__(
        self,
        settings: Settings | None = None,
        environment_provider: EnvironmentProvider | None = None,
        exit_handler: ExitHandler | None = None,
    ) -> None:
        self.settings = settings or get_settings()

        self._environment_provider = environment_provider
        self._exit_handler = exit_handler
        self._error_handler: ErrorHandler | None = None
        self._environment_detector: EnvironmentDetector | None = None
        self._telemetry_collector: TelemetryCollector | None = None
        self._shutdown_manager: ShutdownManager | None = None
        self._server_monitor: ServerMonitor | None = None

        self._previous_excepthook: Any = None
        self._previous_threading_excepthook: Any = None

    @property
    def error_handler(self) -> ErrorHandler:
        if self._error_handler is None:
            self._error_handler = ErrorHandler(self._exit_handler or SystemExitHandler())
        return self._error_handler

    @property
    def environment_detector(self) -> EnvironmentDetector:
        if self._environment_detector is None:
            provider = self._environment_provider or SystemEnvironmentProvider(self.settings)
            self._environment_detector = EnvironmentDetector(provider)
        return self._environment_detector

    @property
    def telemetry_collector(self) -> TelemetryCollector:
        if self._telemetry_collector is None:
            self._telemetry_collector = TelemetryCollector(self.error_handler)
        return self._telemetry_collector

    @property
    def shutdown_manager(self) -> ShutdownManager:
        if self._shutdown_manager is None:
            self._shutdown_manager = ShutdownManager(self.error_handler)
        return self._shutdown_manager

    @property
    def server_monitor(self) -> ServerMonitor:
        if self._server_monitor is None:
            self._server_monitor = ServerMonitor(
                environment_detector=self.environment_detector,
                telemetry_collector=self.telemetry_collector,
                shutdown_manager=self.shutdown_manager,
                error_handler=self.error_handler,
            )
        return self._server_monitor

    def install(self, server: ServerHost) -> bool:
        """Wire the harness to ``server``.

        Returns True when the startup listener was registered, which only
        happens inside a CI environment.
        """
        registered: list[bool] = []

        def _setup() -> None:
            logger.info("Server Test harness initializing...")
            self.install_exception_hooks()

            components = (
                ("EnvironmentDetector", self.environment_detector),
                ("TelemetryCollector", self.telemetry_collector),
                ("ShutdownManager", self.shutdown_manager),
                ("ServerMonitor", self.server_monitor),
            )
            for name, component in components:
                self.error_handler.require_not_none(component, name, ErrorType.GENERAL)

            in_ci = self._classify_environment()
            if in_ci is None:
                return
            if not in_ci:
                logger.info("Not in CI environment, harness will remain inactive")
                return

            logger.info("CI environment detected, registering event handlers")
            if self.error_handler.run_guarded_fatal(
                lambda: server.add_startup_listener(self.server_monitor.on_server_started),
                ErrorType.GENERAL,
                "Failed to register event handlers",
            ):
                logger.debug("Event handlers registered successfully")
                registered.append(True)

        self.error_handler.run_guarded_fatal(
            _setup, ErrorType.GENERAL, "Failed to setup Server Test components"
        )
        return bool(registered)

    def _classify_environment(self) -> bool | None:
        try:
            return self.environment_detector.is_ci_environment()
        except Exception as exc:
            self.error_handler.report_fatal(
                ErrorType.ENVIRONMENT, "Failed to read environment signals", exc
            )
            return None

    # ----- Uncaught exception routing ---------------------------------------
    def install_exception_hooks(self) -> None:
        """Route uncaught exceptions on any thread to a fatal GENERAL report."""
        if self._previous_excepthook is not None:
            return
        self._previous_excepthook = sys.excepthook
        self._previous_threading_excepthook = threading.excepthook
        sys.excepthook = self._handle_uncaught_exception
        threading.excepthook = self._handle_uncaught_thread_exception

    def uninstall_exception_hooks(self) -> None:
        if self._previous_excepthook is None:
            return
        sys.excepthook = self._previous_excepthook
        threading.excepthook = self._previous_threading_excepthook
        self._previous_excepthook = None
        self._previous_threading_excepthook = None

    def _handle_uncaught_exception(
        self,
        exc_type: type[BaseException],
        exc_value: BaseException,
        exc_traceback: TracebackType | None,
    ) -> None:
        if issubclass(exc_type, (KeyboardInterrupt, SystemExit)):
            if self._previous_excepthook is not None:
                self._previous_excepthook(exc_type, exc_value, exc_traceback)
            return
        self.error_handler.report_fatal(
            ErrorType.GENERAL,
            f"Uncaught exception in thread {threading.current_thread().name}",
            exc_value,
        )

    def _handle_uncaught_thread_exception(self, args: threading.ExceptHookArgs) -> None:
        if args.exc_type is SystemExit:
            return
        thread_name = args.thread.name if args.thread is not None else "<unknown>"
        self.error_handler.report_fatal(
            ErrorType.GENERAL,
            f"Uncaught exception in thread {thread_name}",
            args.exc_value,
        )


def create_smoke_test_container(
    settings: Settings | None = None,
    *,
    environment_provider: EnvironmentProvider | None = None,
    exit_handler: ExitHandler | None = None,
    setup_logging: bool = True,
) -> SmokeTestContainer:
    active = settings or get_settings()
    if setup_logging:
        configure_logging(active)
    return SmokeTestContainer(
        active,
        environment_provider=environment_provider,
        exit_handler=exit_handler,
    )


__all__ = ["SmokeTestContainer", "create_smoke_test_container"]
