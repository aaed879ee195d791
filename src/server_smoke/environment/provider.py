"""Environment signal sources.

Mirrors the clock abstraction: a protocol, a system-backed implementation, and a
fixed implementation for deterministic tests.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from server_smoke.settings import Settings, get_settings


@runtime_checkable
class EnvironmentProvider(Protocol):
    """Protocol for reading environment variables and process properties."""

    def getenv(self, name: str) -> str | None:
        """Return the environment variable ``name`` or None if unset."""

    def get_property(self, name: str) -> str | None:
        """Return the process property ``name`` or None if unset."""


class SystemEnvironmentProvider:
    """Reads the live process environment.

    Process properties come from typed settings, so ``SERVER_SMOKE_HEADLESS``
    sets the ``headless`` property.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings

    def getenv(self, name: str) -> str | None:
        return os.environ.get(name)

    def get_property(self, name: str) -> str | None:
        settings = self._settings or get_settings()
        return settings.process_properties().get(name)


class StaticEnvironmentProvider:
    """Fixed signal values for tests."""

    def __init__(
        self,
        env: Mapping[str, str] | None = None,
        properties: Mapping[str, str] | None = None,
    ) -> None:
        self._env = dict(env or {})
        self._properties = dict(properties or {})

    def getenv(self, name: str) -> str | None:
        return self._env.get(name)

    def get_property(self, name: str) -> str | None:
        return self._properties.get(name)


__all__ = ["EnvironmentProvider", "StaticEnvironmentProvider", "SystemEnvironmentProvider"]
