"""Configuration settings loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class PlankaSettings(BaseSettings):
    """Planka connection settings.

    All settings are loaded from environment variables prefixed with PLANKA_.
    The agent credentials are optional here: a missing email or password only
    fails the first call that needs a token.
    """

    model_config = {"env_prefix": "PLANKA_"}

    base_url: str = "http://localhost:3000"
    agent_email: str | None = None
    agent_password: str | None = None

    # Disables TLS certificate verification for every request.
    allow_insecure: bool = False
    timeout: int = 30
    log_level: str = "INFO"


class ServerSettings(BaseSettings):
    """Transport selection, from MCP_SERVER_TYPE and MCP_HTTP_PORT."""

    model_config = {"env_prefix": "MCP_"}

    server_type: Literal["stdio", "http"] = "stdio"
    http_port: int = 3000
