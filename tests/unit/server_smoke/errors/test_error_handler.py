"""Tests for ErrorHandler fatal/recoverable reporting."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from server_smoke.errors import ErrorHandler, ErrorType, RecordingExitHandler, SystemExitHandler


class TestReportFatal:
    @pytest.mark.parametrize(
        ("error_type", "code"),
        [
            (ErrorType.GENERAL, 1),
            (ErrorType.ENVIRONMENT, 2),
            (ErrorType.SERVER_STARTUP, 3),
            (ErrorType.INFO_COLLECTION, 4),
            (ErrorType.SHUTDOWN, 5),
        ],
    )
    def test_exits_once_with_category_code(
        self,
        error_handler: ErrorHandler,
        exit_handler: RecordingExitHandler,
        error_type: ErrorType,
        code: int,
    ) -> None:
        error_handler.report_fatal(error_type, "boom")

        assert exit_handler.codes == [code]

    def test_logs_formatted_message_at_error(
        self, error_handler: ErrorHandler, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.ERROR):
            error_handler.report_fatal(ErrorType.SERVER_STARTUP, "Server not ready")

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.getMessage() == "[SERVER-TEST] ERROR [SERVER_STARTUP]: Server not ready"
        assert record.error_category == "SERVER_STARTUP"
        assert record.exit_code == 3

    def test_includes_cause_details(
        self, error_handler: ErrorHandler, caplog: pytest.LogCaptureFixture
    ) -> None:
        cause = RuntimeError("disk on fire")
        with caplog.at_level(logging.ERROR):
            error_handler.report_fatal(ErrorType.GENERAL, "failed", cause)

        record = caplog.records[-1]
        assert record.exc_info is not None
        assert record.exc_info[1] is cause
        assert "disk on fire" in caplog.text


class TestReportRecoverable:
    def test_never_exits(
        self, error_handler: ErrorHandler, exit_handler: RecordingExitHandler
    ) -> None:
        for error_type in ErrorType:
            error_handler.report_recoverable(error_type, "minor", ValueError("x"))

        assert exit_handler.called is False

    def test_logs_at_warning_with_category(
        self, error_handler: ErrorHandler, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            error_handler.report_recoverable(ErrorType.SHUTDOWN, "slow halt")

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.getMessage() == "[SERVER-TEST] ERROR [SHUTDOWN]: slow halt"


class TestReportSuccess:
    def test_exits_with_zero(
        self, error_handler: ErrorHandler, exit_handler: RecordingExitHandler
    ) -> None:
        error_handler.report_success("done")

        assert exit_handler.codes == [0]


class TestRequireNotNone:
    def test_none_is_fatal(
        self, error_handler: ErrorHandler, exit_handler: RecordingExitHandler, caplog
    ) -> None:
        with caplog.at_level(logging.ERROR):
            error_handler.require_not_none(None, "ServerMonitor", ErrorType.GENERAL)

        assert exit_handler.codes == [1]
        assert "ServerMonitor cannot be None" in caplog.text

    def test_value_passes_through(
        self, error_handler: ErrorHandler, exit_handler: RecordingExitHandler
    ) -> None:
        value = object()

        assert error_handler.require_not_none(value, "thing", ErrorType.GENERAL) is value
        assert exit_handler.called is False


class TestRunGuarded:
    def test_success_returns_true(self, error_handler: ErrorHandler) -> None:
        operation = MagicMock()

        assert error_handler.run_guarded(operation, ErrorType.GENERAL, "op") is True
        operation.assert_called_once_with()

    def test_failure_logs_warning_and_returns_false(
        self,
        error_handler: ErrorHandler,
        exit_handler: RecordingExitHandler,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        operation = MagicMock(side_effect=ValueError("bad value"))

        with caplog.at_level(logging.WARNING):
            result = error_handler.run_guarded(operation, ErrorType.ENVIRONMENT, "Reading env")

        assert result is False
        assert exit_handler.called is False
        assert "[SERVER-TEST] ERROR [ENVIRONMENT]: Reading env: bad value" in caplog.messages


class TestRunGuardedFatal:
    def test_success_does_not_exit(
        self, error_handler: ErrorHandler, exit_handler: RecordingExitHandler
    ) -> None:
        assert error_handler.run_guarded_fatal(lambda: None, ErrorType.GENERAL, "op") is True
        assert exit_handler.called is False

    def test_failure_exits_with_category_code(
        self,
        error_handler: ErrorHandler,
        exit_handler: RecordingExitHandler,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        def _explode() -> None:
            raise RuntimeError("kaput")

        with caplog.at_level(logging.ERROR):
            result = error_handler.run_guarded_fatal(_explode, ErrorType.SHUTDOWN, "Stopping")

        assert result is False
        assert exit_handler.codes == [5]
        assert "[SERVER-TEST] ERROR [SHUTDOWN]: Stopping: kaput" in caplog.messages


class TestExitHandlerSwap:
    def test_set_and_reset(self, exit_handler: RecordingExitHandler) -> None:
        handler = ErrorHandler()
        assert isinstance(handler.exit_handler, SystemExitHandler)

        handler.set_exit_handler(exit_handler)
        handler.report_fatal(ErrorType.GENERAL, "captured")
        assert exit_handler.codes == [1]

        handler.reset_exit_handler()
        assert isinstance(handler.exit_handler, SystemExitHandler)
