"""Logging configuration. Outputs to stderr to avoid conflict with stdio MCP transport."""

import logging
import sys

from planka_mcp.settings import PlankaSettings


def setup_logger(name: str = "planka_mcp", level: str = "INFO") -> logging.Logger:
    """Create a logger that writes to stderr. Calling it again only updates the level."""
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s [%(name)s] %(levelname)s: %(message)s")
    )
    logger.addHandler(handler)
    return logger


def log_environment(logger: logging.Logger, settings: PlankaSettings) -> None:
    """Report which connection settings are present. Never logs the password."""
    logger.info("PLANKA_BASE_URL: %s", settings.base_url)
    if settings.agent_email:
        logger.info("PLANKA_AGENT_EMAIL: %s", settings.agent_email)
    else:
        logger.warning("PLANKA_AGENT_EMAIL environment variable not set")
    if settings.agent_password:
        logger.info("PLANKA_AGENT_PASSWORD: ***")
    else:
        logger.warning("PLANKA_AGENT_PASSWORD environment variable not set")
    if settings.allow_insecure:
        logger.warning("PLANKA_ALLOW_INSECURE is set: TLS certificate verification is disabled")
