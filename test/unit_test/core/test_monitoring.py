"""
Unit tests for the Logfire monitoring module.

This test suite covers:
- Environment variable parsing
- Initialization guards (disabled, missing token)
- Instrumentation of HTTPX and FastAPI
- The request, fallback and error helpers being no-ops while inactive
"""

import importlib
import os
from unittest.mock import MagicMock, patch

import pytest

import tenderchain.core.monitoring as monitoring

MODULE = "tenderchain.core.monitoring"


@pytest.fixture
def reload_monitoring():
    yield
    importlib.reload(monitoring)


class TestLogfireEnvironmentConfiguration:
    def test_disabled_by_default(self, reload_monitoring):
        with patch.dict(os.environ, {}, clear=True):
            importlib.reload(monitoring)
            assert monitoring.LOGFIRE_ENABLED is False
            assert monitoring.LOGFIRE_SERVICE_NAME == "tenderchain-server"

    @pytest.mark.parametrize("value", ["true", "1", "yes", "TRUE"])
    def test_enabled_values(self, value, reload_monitoring):
        with patch.dict(os.environ, {"LOGFIRE_ENABLED": value}):
            importlib.reload(monitoring)
            assert monitoring.LOGFIRE_ENABLED is True

    def test_feature_flags_can_be_disabled(self, reload_monitoring):
        with patch.dict(os.environ, {"LOGFIRE_TRACE_HTTPX": "false", "LOGFIRE_TRACE_FASTAPI": "0"}):
            importlib.reload(monitoring)
            assert monitoring.LOGFIRE_TRACE_HTTPX is False
            assert monitoring.LOGFIRE_TRACE_FASTAPI is False


class TestInitializeLogfire:
    @pytest.fixture(autouse=True)
    def _inactive(self, monkeypatch):
        monkeypatch.setattr(monitoring, "_active", False)

    def test_disabled(self, monkeypatch):
        monkeypatch.setattr(monitoring, "LOGFIRE_ENABLED", False)
        with patch(f"{MODULE}.logfire") as mock_logfire:
            monitoring.initialize_logfire()

        mock_logfire.configure.assert_not_called()
        assert monitoring.is_active() is False

    def test_missing_token(self, monkeypatch):
        monkeypatch.setattr(monitoring, "LOGFIRE_ENABLED", True)
        monkeypatch.setattr(monitoring, "LOGFIRE_TOKEN", "")
        with patch(f"{MODULE}.logfire") as mock_logfire, patch(f"{MODULE}.logger") as mock_logger:
            monitoring.initialize_logfire()

        mock_logfire.configure.assert_not_called()
        mock_logger.warning.assert_called_once()
        assert monitoring.is_active() is False

    def test_configures_and_instruments(self, monkeypatch):
        monkeypatch.setattr(monitoring, "LOGFIRE_ENABLED", True)
        monkeypatch.setattr(monitoring, "LOGFIRE_TOKEN", "tok")
        app = MagicMock()
        with patch(f"{MODULE}.logfire") as mock_logfire:
            monitoring.initialize_logfire(app)

        mock_logfire.configure.assert_called_once()
        assert mock_logfire.configure.call_args.kwargs["token"] == "tok"
        mock_logfire.instrument_httpx.assert_called_once()
        mock_logfire.instrument_fastapi.assert_called_once_with(app=app)
        assert monitoring.is_active() is True

    def test_skips_fastapi_without_app(self, monkeypatch):
        monkeypatch.setattr(monitoring, "LOGFIRE_ENABLED", True)
        monkeypatch.setattr(monitoring, "LOGFIRE_TOKEN", "tok")
        with patch(f"{MODULE}.logfire") as mock_logfire:
            monitoring.initialize_logfire()

        mock_logfire.instrument_fastapi.assert_not_called()

    def test_instrumentation_failure_is_logged(self, monkeypatch):
        monkeypatch.setattr(monitoring, "LOGFIRE_ENABLED", True)
        monkeypatch.setattr(monitoring, "LOGFIRE_TOKEN", "tok")
        with patch(f"{MODULE}.logfire") as mock_logfire, patch(f"{MODULE}.logger") as mock_logger:
            mock_logfire.instrument_httpx.side_effect = RuntimeError("no httpx")
            monitoring.initialize_logfire()

        mock_logger.warning.assert_called_once()
        assert monitoring.is_active() is True


class TestLoggingHelpers:
    def test_helpers_are_noops_while_inactive(self, monkeypatch):
        monkeypatch.setattr(monitoring, "_active", False)
        with patch(f"{MODULE}.logfire") as mock_logfire:
            monitoring.log_api_request("GET", "/health", 200, 1.2)
            monitoring.log_chain_fallback("timeout", 3)
            monitoring.log_error("ValueError", "bad")

        assert mock_logfire.method_calls == []

    def test_log_api_request(self, monkeypatch):
        monkeypatch.setattr(monitoring, "_active", True)
        with patch(f"{MODULE}.logfire") as mock_logfire:
            monitoring.log_api_request("GET", "/api/v1/tenders", 200, 12.5)

        mock_logfire.info.assert_called_once()
        kwargs = mock_logfire.info.call_args.kwargs
        assert kwargs["path"] == "/api/v1/tenders"
        assert kwargs["status_code"] == 200

    def test_log_chain_fallback(self, monkeypatch):
        monkeypatch.setattr(monitoring, "_active", True)
        with patch(f"{MODULE}.logfire") as mock_logfire:
            monitoring.log_chain_fallback("Timeout fetching tenders", 7)

        mock_logfire.warn.assert_called_once()
        assert mock_logfire.warn.call_args.kwargs["cached_count"] == 7

    def test_log_error_with_context(self, monkeypatch):
        monkeypatch.setattr(monitoring, "_active", True)
        with patch(f"{MODULE}.logfire") as mock_logfire:
            monitoring.log_error("ChainConnectionError", "rpc down", {"path": "/api/v1/tenders"})

        mock_logfire.error.assert_called_once_with("ChainConnectionError: rpc down", path="/api/v1/tenders")
