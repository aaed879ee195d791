"""
Structured logging helpers.

Every line the harness writes carries the ``[SERVER-TEST]`` tag so CI log
scrapers can pick the report out of the host server's own output.
"""

from __future__ import annotations

import logging
from typing import Any

LOG_TAG = "[SERVER-TEST]"


class StructuredLogger:
    def __init__(self, name: str, component: str | None = None, tag: str | None = LOG_TAG):
        self.logger = logging.getLogger(name)
        self.component = component
        self.tag = tag
        self.name = name

    def _prepare_extra_and_standard_kwargs(
        self, kwargs: dict[str, Any]
    ) -> tuple[dict[str, Any], dict[str, Any]]:
        standard_logging_kwargs = {"exc_info": None, "stack_info": False, "stacklevel": 1}

        extracted_kwargs: dict[str, Any] = {}
        extra_kwargs: dict[str, Any] = {}

        for key, value in kwargs.items():
            if key in standard_logging_kwargs:
                extracted_kwargs[key] = value
            else:
                extra_kwargs[key] = value

        if self.component:
            extra_kwargs["component"] = self.component

        return extracted_kwargs, extra_kwargs

    def _tagged(self, msg: str) -> str:
        if not self.tag:
            return msg
        return f"{self.tag} {msg}"

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._emit(logging.INFO, msg, args, kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._emit(logging.ERROR, msg, args, kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._emit(logging.WARNING, msg, args, kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._emit(logging.DEBUG, msg, args, kwargs)

    def log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        self._emit(level, msg, args, kwargs)

    def _emit(
        self, level: int, msg: str, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> None:
        extracted_kwargs, extra_kwargs = self._prepare_extra_and_standard_kwargs(kwargs)
        # Records name the caller of the public helper, not this module.
        extracted_kwargs["stacklevel"] = extracted_kwargs.get("stacklevel", 1) + 2
        self.logger.log(level, self._tagged(msg), *args, extra=extra_kwargs, **extracted_kwargs)


def get_logger(name: str, component: str | None = None, **kwargs: Any) -> StructuredLogger:
    return StructuredLogger(name, component=component, **kwargs)


__all__ = [
    "LOG_TAG",
    "StructuredLogger",
    "get_logger",
]
