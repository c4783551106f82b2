"""Tests for the HTTP liveness probe."""

import pytest
from starlette.testclient import TestClient

from planka_mcp.http_probe import create_app
from planka_mcp.version import VERSION


@pytest.fixture
def http():
    with TestClient(create_app()) as c:
        yield c


def test_status(http):
    response = http.get("/status")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "server": "planka-mcp", "version": VERSION}


def test_post_echoes_request_id(http):
    response = http.post("/mcp", json={"jsonrpc": "2.0", "id": 7, "method": "tools/list"})
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == 7
    assert "stdio" in body["result"]["message"]


def test_post_without_json_body(http):
    response = http.post("/mcp", content=b"not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 500
    assert response.json()["error"]["code"] == -32603


def test_get_is_rejected(http):
    response = http.get("/mcp")
    assert response.status_code == 405
    assert response.json()["error"] == {
        "code": -32000,
        "message": "Method not allowed. Use POST for MCP requests.",
    }
