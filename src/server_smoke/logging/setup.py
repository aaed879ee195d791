"""Centralized logging setup for the smoke-test harness."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from server_smoke.logging.json_formatter import StructuredJSONFormatter
from server_smoke.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_LOGGER_NAME = "server_smoke.json"


class _JsonForwardHandler(logging.Handler):
    """Re-emits harness records on the dedicated JSON logger."""

    def __init__(self, target: logging.Logger) -> None:
        super().__init__()
        self._target = target

    def emit(self, record: logging.LogRecord) -> None:
        self._target.handle(record)


def configure_logging(settings: Settings | None = None) -> None:
    """
    Configure console and optional rotating file logging.

    Safe to call more than once: handlers that already target the same stream or
    file are not added again.

    Args:
        settings: Harness settings; loaded from the environment when omitted.
    """

    active = settings or get_settings()
    level = logging.getLevelName(active.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    harness_logger = logging.getLogger("server_smoke")
    harness_logger.setLevel(level)

    root = logging.getLogger()
    if root.level == logging.NOTSET or root.level > level:
        root.setLevel(level)

    # Check for console StreamHandlers (exclude file handlers and test fixtures)
    console_handlers = [
        h
        for h in root.handlers
        if isinstance(h, logging.StreamHandler)
        and not isinstance(h, logging.FileHandler)
        and type(h).__name__ not in {"LogCaptureHandler", "_LiveLoggingNullHandler"}
    ]
    if not console_handlers:
        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(console)

    if active.log_dir is None:
        return

    log_dir = Path(active.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    existing_targets = {
        getattr(handler, "baseFilename", None)
        for handler in root.handlers
        if hasattr(handler, "baseFilename")
    }

    general_path = str((log_dir / "server_smoke.log").resolve())
    if general_path not in existing_targets:
        general_handler = logging.handlers.RotatingFileHandler(
            general_path,
            maxBytes=active.log_max_bytes,
            backupCount=active.log_backup_count,
        )
        general_handler.setLevel(level)
        general_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(general_handler)

    if not active.json_logs:
        return

    json_logger = logging.getLogger(JSON_LOGGER_NAME)
    json_logger.setLevel(logging.DEBUG)
    json_logger.propagate = False

    existing_json_targets = {
        getattr(handler, "baseFilename", None)
        for handler in json_logger.handlers
        if hasattr(handler, "baseFilename")
    }
    json_path = str((log_dir / "server_smoke.jsonl").resolve())
    if json_path not in existing_json_targets:
        json_handler = logging.handlers.RotatingFileHandler(
            json_path,
            maxBytes=active.log_max_bytes,
            backupCount=active.log_backup_count,
        )
        json_handler.setLevel(logging.DEBUG)
        json_handler.setFormatter(StructuredJSONFormatter(sort_keys=True))
        json_logger.addHandler(json_handler)

    if not any(isinstance(h, _JsonForwardHandler) for h in harness_logger.handlers):
        harness_logger.addHandler(_JsonForwardHandler(json_logger))


__all__ = ["JSON_LOGGER_NAME", "LOG_FORMAT", "configure_logging"]
