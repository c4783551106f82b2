"""FastMCP server instance."""

from fastmcp import FastMCP

from planka_mcp.lifespan import lifespan

mcp = FastMCP("planka-mcp", lifespan=lifespan)
