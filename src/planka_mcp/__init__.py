"""Planka MCP server: kanban tools for AI agents."""

from planka_mcp.planka.client import PlankaClient
from planka_mcp.planka.session import PlankaSession
from planka_mcp.server import mcp
from planka_mcp.settings import PlankaSettings
from planka_mcp.version import VERSION

__all__ = ["mcp", "PlankaSettings", "PlankaClient", "PlankaSession", "VERSION"]
