"""End-to-end smoke runs against the threaded reference host."""

from __future__ import annotations

import pytest

from server_smoke.app.container import SmokeTestContainer
from server_smoke.environment.provider import StaticEnvironmentProvider
from server_smoke.errors import RecordingExitHandler
from server_smoke.host.threaded import LoadedModule, ThreadedServerHost
from server_smoke.settings import Settings

pytestmark = pytest.mark.integration

MODULES = [
    LoadedModule("core", "1.20.1", "Core Runtime"),
    LoadedModule("servertest", "0.1.0", "Server Test"),
]


@pytest.fixture
def container(settings: Settings, exit_handler: RecordingExitHandler):
    smoke = SmokeTestContainer(
        settings,
        environment_provider=StaticEnvironmentProvider(env={"CI": "true"}),
        exit_handler=exit_handler,
    )
    yield smoke
    smoke.uninstall_exception_hooks()


class TestThreadedHostSmoke:
    def test_clean_start_reports_and_exits_zero(
        self, container: SmokeTestContainer, exit_handler: RecordingExitHandler, debug_logs
    ) -> None:
        host = ThreadedServerHost(modules=MODULES, tick_interval=0.005)
        assert container.install(host) is True

        host.start()

        assert exit_handler.wait(timeout=10)
        assert host.join(timeout=10) is True
        assert exit_handler.codes == [0]
        assert container.server_monitor.test_sequence_executed is True
        assert "[SERVER-TEST] Loaded Mods (2 total):" in debug_logs.messages
        assert "[SERVER-TEST] - Core Runtime (1.20.1)" in debug_logs.messages
        assert "[SERVER-TEST] - Server Test (0.1.0)" in debug_logs.messages
        assert any(m.startswith("[SERVER-TEST] TPS: 20.0") for m in debug_logs.messages)

    def test_failed_halt_exits_with_shutdown_code(
        self, container: SmokeTestContainer, exit_handler: RecordingExitHandler
    ) -> None:
        class _StuckHost(ThreadedServerHost):
            def halt(self) -> None:
                super().halt()
                raise RuntimeError("world save failed")

        host = _StuckHost(modules=MODULES, tick_interval=0.005)
        container.install(host)

        host.start()

        assert exit_handler.wait(timeout=10)
        assert host.join(timeout=10) is True
        assert exit_handler.codes == [5]

    def test_development_environment_leaves_host_alone(
        self, settings: Settings, exit_handler: RecordingExitHandler
    ) -> None:
        smoke = SmokeTestContainer(
            settings, environment_provider=StaticEnvironmentProvider(), exit_handler=exit_handler
        )
        host = ThreadedServerHost(modules=MODULES, tick_interval=0.005)
        try:
            assert smoke.install(host) is False
            host.start()
            assert exit_handler.wait(timeout=0.2) is False
            assert host.is_running() is True
        finally:
            smoke.uninstall_exception_hooks()
            host.halt()
            host.join(timeout=5)

        assert exit_handler.codes == []
