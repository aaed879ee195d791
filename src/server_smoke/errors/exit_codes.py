"""Process exit codes and the failure categories bound to them."""

from __future__ import annotations

from enum import Enum

SUCCESS = 0
GENERAL_ERROR = 1
ENVIRONMENT_ERROR = 2
SERVER_STARTUP_ERROR = 3
INFO_COLLECTION_ERROR = 4
SHUTDOWN_ERROR = 5


class ErrorType(Enum):
    """Failure categories; each maps to exactly one non-zero exit code."""

    GENERAL = GENERAL_ERROR
    ENVIRONMENT = ENVIRONMENT_ERROR
    SERVER_STARTUP = SERVER_STARTUP_ERROR
    INFO_COLLECTION = INFO_COLLECTION_ERROR
    SHUTDOWN = SHUTDOWN_ERROR

    @property
    def exit_code(self) -> int:
        return self.value


__all__ = [
    "ENVIRONMENT_ERROR",
    "GENERAL_ERROR",
    "INFO_COLLECTION_ERROR",
    "SERVER_STARTUP_ERROR",
    "SHUTDOWN_ERROR",
    "SUCCESS",
    "ErrorType",
]
