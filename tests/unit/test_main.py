"""Tests for the python -m planka_mcp entry point."""

import logging
from unittest.mock import patch

import pytest

from planka_mcp.__main__ import main


@pytest.fixture(autouse=True)
def no_dotenv():
    with patch("planka_mcp.__main__.load_dotenv"):
        yield


def test_invalid_setting_logs_and_exits(planka_env, monkeypatch, caplog):
    monkeypatch.setenv("PLANKA_TIMEOUT", "abc")
    with caplog.at_level(logging.ERROR, logger="planka_mcp"):
        with pytest.raises(SystemExit) as exc_info:
            main()
    assert exc_info.value.code == 1
    assert "Error starting server" in caplog.text


def test_server_failure_logs_and_exits(planka_env, monkeypatch, caplog):
    monkeypatch.setenv("MCP_SERVER_TYPE", "stdio")
    with patch("planka_mcp.server.mcp.run", side_effect=RuntimeError("stdio closed")) as run:
        with caplog.at_level(logging.ERROR, logger="planka_mcp"):
            with pytest.raises(SystemExit) as exc_info:
                main()
    run.assert_called_once_with()
    assert exc_info.value.code == 1
    assert "Error starting server" in caplog.text
    assert "stdio closed" in caplog.text


def test_http_mode_serves_status_app(planka_env, monkeypatch):
    monkeypatch.setenv("MCP_SERVER_TYPE", "http")
    monkeypatch.setenv("MCP_HTTP_PORT", "8123")
    with patch("planka_mcp.http_probe.run") as run, patch("planka_mcp.server.mcp.run") as mcp_run:
        main()
    run.assert_called_once_with(8123)
    mcp_run.assert_not_called()
