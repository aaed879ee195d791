"""Single choke point for every "this run must fail" decision."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from server_smoke.errors.exit_codes import SUCCESS, ErrorType
from server_smoke.errors.exit_handler import ExitHandler, SystemExitHandler
from server_smoke.utilities.logging_patterns import StructuredLogger, get_logger

T = TypeVar("T")


class ErrorHandler:
    """
    Logs failures by category and terminates through an injectable exit seam.

    Fatal reports always reach the exit handler exactly once. With the production
    handler the process is gone before ``report_fatal`` returns; with a recording
    handler control comes back to the caller, so nothing after a fatal report
    may assume the run continues.
    """

    def __init__(
        self,
        exit_handler: ExitHandler | None = None,
        logger: StructuredLogger | None = None,
    ) -> None:
        self._exit_handler: ExitHandler = exit_handler or SystemExitHandler()
        self._logger = logger or get_logger(__name__, component="errors")

    @property
    def exit_handler(self) -> ExitHandler:
        return self._exit_handler

    def set_exit_handler(self, handler: ExitHandler) -> None:
        self._exit_handler = handler

    def reset_exit_handler(self) -> None:
        self._exit_handler = SystemExitHandler()

    @staticmethod
    def format_error_message(error_type: ErrorType, message: str) -> str:
        return f"ERROR [{error_type.name}]: {message}"

    def report_fatal(
        self, error_type: ErrorType, message: str, cause: BaseException | None = None
    ) -> None:
        """Log at ERROR and exit with the category's code."""
        self._logger.error(
            self.format_error_message(error_type, message),
            exc_info=cause,
            error_category=error_type.name,
            exit_code=error_type.exit_code,
        )
        self._exit_handler.exit(error_type.exit_code)

    def report_recoverable(
        self, error_type: ErrorType, message: str, cause: BaseException | None = None
    ) -> None:
        """Log at WARNING. Never exits."""
        self._logger.warning(
            self.format_error_message(error_type, message),
            exc_info=cause,
            error_category=error_type.name,
        )

    def report_success(self, message: str) -> None:
        self._logger.info(message, exit_code=SUCCESS)
        self._exit_handler.exit(SUCCESS)

    def require_not_none(self, value: T | None, name: str, error_type: ErrorType) -> T | None:
        if value is None:
            self.report_fatal(error_type, f"{name} cannot be None")
        return value

    def run_guarded(
        self, operation: Callable[[], Any], error_type: ErrorType, message: str
    ) -> bool:
        """Run ``operation``; on failure log a recoverable report and return False."""
        try:
            operation()
        except Exception as exc:
            self.report_recoverable(error_type, f"{message}: {exc}", exc)
            return False
        return True

    def run_guarded_fatal(
        self, operation: Callable[[], Any], error_type: ErrorType, message: str
    ) -> bool:
        """Run ``operation``; on failure report fatally.

        Returns False only when the exit handler let control come back.
        """
        try:
            operation()
        except Exception as exc:
            self.report_fatal(error_type, f"{message}: {exc}", exc)
            return False
        return True


__all__ = ["ErrorHandler"]
