"""Tests for structured logging configuration."""

import logging

import httpx
import pytest
import structlog

from nginx_smoke.logging_config import (
    ErrorTracker,
    configure_structured_logging,
    get_logger,
    log_request,
    log_response,
)


@pytest.fixture(autouse=True)
def reset_structlog():
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


class TestConfigureStructuredLogging:
    """Test configure_structured_logging()."""

    def test_quiets_httpx_loggers(self):
        configure_structured_logging(log_level="DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_json_renderer_selected(self):
        configure_structured_logging(enable_json=True)

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer_selected(self):
        configure_structured_logging(enable_json=False)

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)


class TestLoggers:
    """Test logger helpers and the httpx hooks."""

    def test_get_logger_binds_context(self):
        with structlog.testing.capture_logs() as logs:
            get_logger("nginx_smoke.test", check="http").info("check_started")

        assert logs == [{"check": "http", "event": "check_started", "log_level": "info"}]

    @pytest.mark.asyncio
    async def test_http_hooks_log_request_and_response(self):
        request = httpx.Request("GET", "http://nginx/")
        response = httpx.Response(503, request=request)

        with structlog.testing.capture_logs() as logs:
            await log_request(request)
            await log_response(response)

        assert [entry["event"] for entry in logs] == ["request_sent", "response_received"]
        assert logs[1]["status_code"] == 503

    def test_error_tracker_returns_id(self):
        tracker = ErrorTracker()

        with structlog.testing.capture_logs() as logs:
            error_id = tracker.track_error(RuntimeError("boom"), context={"check": "http"})

        assert len(error_id) == 36
        assert logs[0]["error_id"] == error_id
        assert logs[0]["error_type"] == "RuntimeError"
        assert logs[0]["check"] == "http"
