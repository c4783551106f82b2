"""Minimal HTTP mode: a status endpoint and a stub JSON-RPC echo.

This is a liveness probe, not an MCP transport. Tools are only served over stdio.
"""

from __future__ import annotations

import logging
from json import JSONDecodeError

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from planka_mcp.version import VERSION

logger = logging.getLogger("planka_mcp")

SERVER_NAME = "planka-mcp"


def _rpc_error(code: int, message: str, request_id=None, status_code: int = 500) -> JSONResponse:
    return JSONResponse(
        {"jsonrpc": "2.0", "error": {"code": code, "message": message}, "id": request_id},
        status_code=status_code,
    )


async def status(request: Request) -> JSONResponse:  # noqa: ARG001
    return JSONResponse({"status": "ok", "server": SERVER_NAME, "version": VERSION})


async def mcp_post(request: Request) -> JSONResponse:
    logger.info("Received POST /mcp request")
    try:
        payload = await request.json()
    except JSONDecodeError:
        logger.error("POST /mcp carried a body that is not JSON")
        return _rpc_error(-32603, "Internal server error")

    request_id = payload.get("id") if isinstance(payload, dict) else None
    return JSONResponse(
        {
            "jsonrpc": "2.0",
            "result": {
                "message": (
                    "MCP Server is running. This HTTP endpoint is for testing only. "
                    "Please use stdio transport for full functionality."
                )
            },
            "id": request_id,
        }
    )


async def mcp_get(request: Request) -> JSONResponse:  # noqa: ARG001
    logger.info("Received GET /mcp request")
    return _rpc_error(-32000, "Method not allowed. Use POST for MCP requests.", status_code=405)


def create_app() -> Starlette:
    return Starlette(
        routes=[
            Route("/status", status, methods=["GET"]),
            Route("/mcp", mcp_post, methods=["POST"]),
            Route("/mcp", mcp_get, methods=["GET"]),
        ]
    )


def run(port: int) -> None:
    import uvicorn

    logger.info("HTTP probe listening on port %d (status at http://localhost:%d/status)", port, port)
    uvicorn.run(create_app(), host="0.0.0.0", port=port, log_level="warning")
