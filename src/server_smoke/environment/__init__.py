"""CI environment detection."""

from server_smoke.environment.detector import EnvironmentDetector
from server_smoke.environment.provider import (
    EnvironmentProvider,
    StaticEnvironmentProvider,
    SystemEnvironmentProvider,
)

__all__ = [
    "EnvironmentDetector",
    "EnvironmentProvider",
    "StaticEnvironmentProvider",
    "SystemEnvironmentProvider",
]
