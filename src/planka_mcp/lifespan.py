"""Server lifespan: creates the PlankaClient on startup, closes it on shutdown."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from planka_mcp.logging.logger import setup_logger
from planka_mcp.planka.client import PlankaClient
from planka_mcp.planka.session import PlankaSession
from planka_mcp.settings import PlankaSettings

_client: PlankaClient | None = None
_settings: PlankaSettings | None = None


def get_planka_client() -> PlankaClient:
    """Return the active PlankaClient. Only valid during server lifespan."""
    if _client is None:
        raise RuntimeError("PlankaClient not initialized. Is the server running?")
    return _client


def get_settings() -> PlankaSettings:
    """Return the loaded settings. Only valid during server lifespan."""
    if _settings is None:
        raise RuntimeError("Settings not loaded. Is the server running?")
    return _settings


def create_client(settings: PlankaSettings) -> PlankaClient:
    """Build a client with a fresh, not yet authenticated session."""
    session = PlankaSession(settings.agent_email, settings.agent_password)
    return PlankaClient(
        base_url=settings.base_url,
        session=session,
        timeout=settings.timeout,
        verify=not settings.allow_insecure,
    )


@asynccontextmanager
async def lifespan(server) -> AsyncIterator[None]:  # noqa: ARG001
    """Async context manager that manages the PlankaClient lifecycle."""
    global _client, _settings

    _settings = PlankaSettings()
    logger = setup_logger(level=_settings.log_level)
    logger.info("Starting planka-mcp server (url=%s)", _settings.base_url)

    _client = create_client(_settings)

    try:
        yield
    finally:
        logger.info("Shutting down planka-mcp server")
        await _client.close()
        _client = None
        _settings = None
