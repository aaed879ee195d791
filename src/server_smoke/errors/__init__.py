"""
Error taxonomy and exit-code handling for the smoke-test harness.

Every failure is classified into one ``ErrorType`` and either escalated to a
process exit or downgraded to a warning by ``ErrorHandler``.
"""

from __future__ import annotations

import sys
import traceback
from datetime import datetime
from typing import Any

from server_smoke.errors.exit_codes import (
    ENVIRONMENT_ERROR,
    GENERAL_ERROR,
    INFO_COLLECTION_ERROR,
    SERVER_STARTUP_ERROR,
    SHUTDOWN_ERROR,
    SUCCESS,
    ErrorType,
)
from server_smoke.errors.exit_handler import ExitHandler, RecordingExitHandler, SystemExitHandler
from server_smoke.errors.handler import ErrorHandler


def _capture_traceback() -> str:
    """Return the active traceback or, if none, a snapshot of the current stack."""

    exc_type, exc_value, exc_tb = sys.exc_info()
    if exc_type is not None and exc_tb is not None:
        return "".join(traceback.format_exception(exc_type, exc_value, exc_tb))

    stack = traceback.format_stack()
    if not stack:
        return ""
    # Drop the last frame so the helper itself does not appear in the stack trace
    return "".join(stack[:-1])


class ServerTestError(Exception):
    """Base exception class for harness failures"""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
        recoverable: bool = False,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.recoverable = recoverable
        self.timestamp = datetime.now()
        self.traceback = _capture_traceback()
        self.original_error = original_error

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "recoverable": self.recoverable,
            "timestamp": self.timestamp.isoformat(),
            "traceback": self.traceback,
        }


class TelemetryCollectionError(ServerTestError):
    """Raised when tick performance or the module inventory cannot be read"""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, error_code="INFO_COLLECTION_ERROR", **kwargs)


class RejectedExecutionError(ServerTestError):
    """Raised by a host that refuses to schedule work on its own thread"""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, error_code="REJECTED_EXECUTION", **kwargs)


__all__ = [
    "ENVIRONMENT_ERROR",
    "GENERAL_ERROR",
    "INFO_COLLECTION_ERROR",
    "SERVER_STARTUP_ERROR",
    "SHUTDOWN_ERROR",
    "SUCCESS",
    "ErrorHandler",
    "ErrorType",
    "ExitHandler",
    "RecordingExitHandler",
    "RejectedExecutionError",
    "ServerTestError",
    "SystemExitHandler",
    "TelemetryCollectionError",
]
