"""
Shared fixtures for the smoke-test harness.
"""

from __future__ import annotations

import logging

import pytest

from server_smoke.environment.provider import StaticEnvironmentProvider
from server_smoke.errors import ErrorHandler, RecordingExitHandler
from server_smoke.settings import Settings, get_settings
from tests.support.fake_host import FakeModule, FakeServerHost


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch: pytest.MonkeyPatch):
    """Keep the developer's environment out of CI detection and settings."""
    for name in ("GITHUB_ACTIONS", "CI", "SERVER_SMOKE_HEADLESS", "SERVER_SMOKE_LOG_DIR"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def exit_handler() -> RecordingExitHandler:
    return RecordingExitHandler()


@pytest.fixture
def error_handler(exit_handler: RecordingExitHandler) -> ErrorHandler:
    return ErrorHandler(exit_handler)


@pytest.fixture
def ci_provider() -> StaticEnvironmentProvider:
    return StaticEnvironmentProvider(env={"GITHUB_ACTIONS": "true"})


@pytest.fixture
def dev_provider() -> StaticEnvironmentProvider:
    return StaticEnvironmentProvider()


@pytest.fixture
def sample_modules() -> list[FakeModule]:
    return [
        FakeModule("core", "1.20.1", "Core Runtime"),
        FakeModule("servertest", "0.1.0", "Server Test"),
        FakeModule("worldgen", "3.2.0", "World Generation"),
    ]


@pytest.fixture
def fake_host(sample_modules: list[FakeModule]) -> FakeServerHost:
    return FakeServerHost(modules=sample_modules)


@pytest.fixture
def debug_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    caplog.set_level(logging.DEBUG)
    return caplog
