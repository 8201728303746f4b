"""Tests for the unitlens HTTP server."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from unitlens.api.server import INTERNAL_ERROR_BODY, create_app
from unitlens.domain.models import ExecutionResult, Invocation
from unitlens.runner.command import (
    COMMAND_FAILED_STATUS,
    CommandFailedError,
    CommandTimeoutError,
    ProcessIOError,
)


def _failed(output: str, returncode: int = 3) -> CommandFailedError:
    invocation = Invocation(program="systemctl", args=("status", "nginx"))
    return CommandFailedError(
        ExecutionResult(invocation=invocation, output=output, returncode=returncode)
    )


@pytest.fixture
def client(mock_queries: MagicMock) -> TestClient:
    """A test client with a mock SystemdQueries injected."""
    return TestClient(create_app(queries=mock_queries))


class TestHealthEndpoint:
    def test_health_returns_ok(self, client: TestClient, mock_queries: MagicMock) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {
            "status": "ok", "systemctl": "systemctl", "journalctl": "journalctl",
        }
        mock_queries.system_summary.assert_not_called()


class TestSummaryEndpoint:
    def test_summary_plain_text(self, client: TestClient, mock_queries: MagicMock) -> None:
        mock_queries.system_summary.return_value = "unit-a loaded\nunit-b loaded\n"
        resp = client.get("/summary")
        assert resp.status_code == 200
        assert resp.text == "unit-a loaded\nunit-b loaded\n"
        assert resp.headers["content-type"].startswith("text/plain")

    def test_summary_command_failure(self, client: TestClient, mock_queries: MagicMock) -> None:
        mock_queries.system_summary.side_effect = _failed("Failed to connect to bus")
        resp = client.get("/summary")
        assert resp.status_code == COMMAND_FAILED_STATUS
        assert resp.text == "Failed to connect to bus"


class TestStatusEndpoint:
    def test_status_success(self, client: TestClient, mock_queries: MagicMock) -> None:
        mock_queries.unit_status.return_value = "● nginx.service - A high performance web server\n"
        resp = client.get("/status/nginx.service")
        assert resp.status_code == 200
        assert resp.text == "● nginx.service - A high performance web server\n"
        mock_queries.unit_status.assert_called_once_with("nginx.service")

    def test_status_not_found_surfaces_output(
        self, client: TestClient, mock_queries: MagicMock
    ) -> None:
        mock_queries.unit_status.side_effect = _failed("Unit nginx.service could not be found.")
        resp = client.get("/status/nginx")
        assert resp.status_code == COMMAND_FAILED_STATUS
        assert resp.text == "Unit nginx.service could not be found."
        assert resp.headers["content-type"].startswith("text/plain")

    def test_status_unit_with_metacharacters(
        self, client: TestClient, mock_queries: MagicMock
    ) -> None:
        mock_queries.unit_status.return_value = ""
        client.get("/status/%24%28whoami%29")
        mock_queries.unit_status.assert_called_once_with("$(whoami)")

    def test_status_io_error_is_hidden(
        self,
        client: TestClient,
        mock_queries: MagicMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        invocation = Invocation(program="/nope/systemctl")
        os_error = FileNotFoundError(2, "No such file or directory")
        mock_queries.unit_status.side_effect = ProcessIOError(
            "Cannot run '/nope/systemctl': No such file or directory", invocation, os_error
        )
        with caplog.at_level(logging.ERROR, logger="unitlens.api.server"):
            resp = client.get("/status/nginx")
        assert resp.status_code == 500
        assert resp.text == INTERNAL_ERROR_BODY
        assert "/nope/systemctl" not in resp.text
        assert "Cannot run '/nope/systemctl'" in caplog.text

    def test_timeout_maps_to_internal_error(
        self, client: TestClient, mock_queries: MagicMock
    ) -> None:
        mock_queries.unit_status.side_effect = CommandTimeoutError(
            Invocation(program="systemctl"), 1.0
        )
        resp = client.get("/status/nginx")
        assert resp.status_code == 500
        assert resp.text == INTERNAL_ERROR_BODY


class TestLogsEndpoint:
    def test_logs_without_since(self, client: TestClient, mock_queries: MagicMock) -> None:
        mock_queries.unit_logs.return_value = "-- No entries --\n"
        resp = client.get("/logs/app")
        assert resp.status_code == 200
        assert resp.text == "-- No entries --\n"
        mock_queries.unit_logs.assert_called_once_with("app", since=None)

    def test_logs_with_since(self, client: TestClient, mock_queries: MagicMock) -> None:
        mock_queries.unit_logs.return_value = "line\n"
        resp = client.get("/logs/app", params={"since": "2024-01-01 10:00"})
        assert resp.status_code == 200
        mock_queries.unit_logs.assert_called_once_with("app", since="2024-01-01 10:00")

    def test_logs_command_failure(self, client: TestClient, mock_queries: MagicMock) -> None:
        mock_queries.unit_logs.side_effect = _failed("Failed to parse timestamp: soon", 1)
        resp = client.get("/logs/app", params={"since": "soon"})
        assert resp.status_code == COMMAND_FAILED_STATUS
        assert resp.text == "Failed to parse timestamp: soon"


class TestEndToEnd:
    """Route requests through the real runner into stub executables."""

    def test_summary_via_stub(self, summary_stub: str) -> None:
        client = TestClient(create_app(systemctl=summary_stub))
        resp = client.get("/summary")
        assert resp.status_code == 200
        assert resp.text == "unit-a loaded\nunit-b loaded\n"

    def test_status_not_found_via_stub(self, not_found_stub: str) -> None:
        client = TestClient(create_app(systemctl=not_found_stub))
        resp = client.get("/status/nginx")
        assert resp.status_code == COMMAND_FAILED_STATUS
        assert resp.text == "Unit nginx.service could not be found."

    def test_logs_arguments_via_stub(self, echo_args_stub: str) -> None:
        client = TestClient(create_app(journalctl=echo_args_stub))
        resp = client.get("/logs/app", params={"since": "2024-01-01"})
        assert resp.text.splitlines() == [
            "--no-pager", "--unit", "app", "--since", "2024-01-01",
        ]

    def test_missing_binary_is_500(self, missing_program: str) -> None:
        client = TestClient(create_app(systemctl=missing_program, journalctl=missing_program))
        for path in ("/summary", "/status/nginx", "/logs/nginx"):
            resp = client.get(path)
            assert resp.status_code == 500
            assert resp.text == INTERNAL_ERROR_BODY

    def test_repeat_request_is_identical(self, summary_stub: str) -> None:
        client = TestClient(create_app(systemctl=summary_stub))
        assert client.get("/summary").content == client.get("/summary").content

    def test_nul_byte_unit_is_500(
        self, echo_args_stub: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        client = TestClient(create_app(systemctl=echo_args_stub))
        with caplog.at_level(logging.ERROR, logger="unitlens.api.server"):
            resp = client.get("/status/a%00b")
        assert resp.status_code == 500
        assert resp.text == INTERNAL_ERROR_BODY
        assert "GET /status/" in caplog.text
