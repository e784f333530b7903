"""Testes dos hooks de logging do transporte."""

from __future__ import annotations

import logging

import pytest

from wazapin.errors import ApiError, NetworkError
from wazapin.http import LoggingHooks, NullHooks

URL = "https://graph.facebook.com/v18.0/123/messages"


class TestLoggingHooks:
    """Logs estruturados sem PII."""

    def test_request_and_response_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        hooks = LoggingHooks()
        with caplog.at_level(logging.DEBUG, logger="wazapin.http.hooks"):
            hooks.on_request("POST", URL)
            hooks.on_response("POST", URL, 200, 12.3456)

        started, succeeded = caplog.records
        assert started.getMessage() == "graph_request_started"
        assert succeeded.getMessage() == "graph_request_succeeded"
        assert succeeded.status_code == 200
        assert succeeded.elapsed_ms == 12.35

    def test_api_error_logged_with_trace(self, caplog: pytest.LogCaptureFixture) -> None:
        error = ApiError("bad", status_code=400, error_code=100, fbtrace_id="trace-1")
        with caplog.at_level(logging.WARNING, logger="wazapin.http.hooks"):
            LoggingHooks().on_error("POST", URL, error)

        record = caplog.records[0]
        assert record.levelno == logging.WARNING
        assert record.error_kind == "api"
        assert record.error_code == "API_ERROR_100"
        assert record.status_code == 400
        assert record.fbtrace_id == "trace-1"

    def test_network_error_has_no_status(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="wazapin.http.hooks"):
            LoggingHooks().on_error("GET", URL, NetworkError("down"))

        record = caplog.records[0]
        assert record.error_kind == "network"
        assert not hasattr(record, "status_code")

    def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        custom = logging.getLogger("minha_app.graph")
        with caplog.at_level(logging.DEBUG, logger="minha_app.graph"):
            LoggingHooks(custom).on_request("GET", URL)

        assert caplog.records[0].name == "minha_app.graph"


def test_null_hooks_are_silent(caplog: pytest.LogCaptureFixture) -> None:
    hooks = NullHooks()
    with caplog.at_level(logging.DEBUG):
        hooks.on_request("GET", URL)
        hooks.on_response("GET", URL, 200, 1.0)
        hooks.on_error("GET", URL, NetworkError("x"))

    assert caplog.records == []
