"""JSON logging formatter carrying structured context fields."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

# LogRecord attributes that are never treated as extra context.
_STANDARD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "asctime",
        "taskName",
    }
)


class StructuredJSONFormatter(logging.Formatter):
    """JSON formatter that flattens ``extra`` fields into the log entry."""

    def __init__(
        self,
        *,
        ensure_ascii: bool = False,
        default: Any = str,
        sort_keys: bool = False,
        timestamp_format: str = "%Y-%m-%dT%H:%M:%S.%fZ",
    ) -> None:
        """Initialize the JSON formatter.

        Args:
            ensure_ascii: Whether to ensure ASCII encoding in JSON output
            default: Default function for JSON serialization of non-serializable objects
            sort_keys: Whether to sort keys in the JSON output
            timestamp_format: Format string for timestamps
        """
        super().__init__()
        self.ensure_ascii = ensure_ascii
        self.default = default
        self.sort_keys = sort_keys
        self.timestamp_format = timestamp_format

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self._format_timestamp(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName if record.funcName is not None else "<module>",
            "line": record.lineno,
            "thread": record.threadName,
            "process": record.process,
        }

        if record.exc_info:
            log_entry["exception"] = self._format_exception(record.exc_info)

        if record.stack_info:
            log_entry["stack_trace"] = record.stack_info

        for key, value in self._extract_extra_fields(record).items():
            if key not in log_entry:
                log_entry[key] = value

        try:
            return json.dumps(
                log_entry,
                ensure_ascii=self.ensure_ascii,
                default=self.default,
                sort_keys=self.sort_keys,
            )
        except (TypeError, ValueError) as exc:
            fallback_entry = {
                "timestamp": log_entry["timestamp"],
                "level": log_entry["level"],
                "logger": log_entry["logger"],
                "message": f"JSON serialization failed: {exc}",
                "original_message": str(log_entry.get("message", "")),
            }
            return json.dumps(
                fallback_entry,
                ensure_ascii=self.ensure_ascii,
                sort_keys=self.sort_keys,
            )

    def _format_timestamp(self, created: float) -> str:
        dt = datetime.fromtimestamp(created, UTC)
        return dt.strftime(self.timestamp_format)

    def _format_exception(self, exc_info: Any) -> dict[str, Any]:
        """Format exception information for JSON output.

        The cause chain is included because fatal reports are usually a wrapper
        around the error that actually broke the run.
        """
        exc_type, exc_value, _exc_traceback = exc_info

        payload: dict[str, Any] = {
            "type": exc_type.__name__ if exc_type else "Unknown",
            "message": str(exc_value) if exc_value else "",
            "module": getattr(exc_type, "__module__", "") if exc_type else "",
        }
        cause = getattr(exc_value, "__cause__", None)
        if cause is not None:
            payload["cause"] = {"type": type(cause).__name__, "message": str(cause)}
        return payload

    def _extract_extra_fields(self, record: logging.LogRecord) -> dict[str, Any]:
        return {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        }


__all__ = ["StructuredJSONFormatter"]
