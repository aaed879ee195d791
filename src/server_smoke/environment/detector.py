"""Detects whether the harness runs under automated CI control."""

from __future__ import annotations

from server_smoke.environment.provider import EnvironmentProvider, SystemEnvironmentProvider
from server_smoke.utilities.logging_patterns import get_logger

logger = get_logger(__name__, component="environment")

GITHUB_ACTIONS_VAR = "GITHUB_ACTIONS"
CI_VAR = "CI"
HEADLESS_PROPERTY = "headless"

DEVELOPMENT_ENVIRONMENT = "Development environment"
CI_ENVIRONMENT_PREFIX = "CI Environment detected: "


def _is_true(value: str | None) -> bool:
    return value is not None and value.lower() == "true"


class EnvironmentDetector:
    """Classifies the process from three signals, checked in priority order.

    1. ``GITHUB_ACTIONS`` environment variable
    2. ``CI`` environment variable
    3. ``headless`` process property

    A signal matches when its value equals "true", ignoring case.
    """

    def __init__(self, environment_provider: EnvironmentProvider | None = None) -> None:
        self._provider: EnvironmentProvider = environment_provider or SystemEnvironmentProvider()

    def _matched_signal(self) -> str | None:
        if _is_true(self._provider.getenv(GITHUB_ACTIONS_VAR)):
            return "GitHub Actions"
        if _is_true(self._provider.getenv(CI_VAR)):
            return "Generic CI"
        if _is_true(self._provider.get_property(HEADLESS_PROPERTY)):
            return "Headless mode"
        return None

    def is_ci_environment(self) -> bool:
        signal = self._matched_signal()
        if signal is not None:
            logger.debug(f"{signal} environment detected")
            return True
        return False

    def describe_environment(self) -> str:
        signal = self._matched_signal()
        if signal is None:
            return DEVELOPMENT_ENVIRONMENT
        return f"{CI_ENVIRONMENT_PREFIX}{signal}"


__all__ = ["EnvironmentDetector"]
