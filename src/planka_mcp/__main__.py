"""Entry point for running the Planka MCP server: python -m planka_mcp"""

import sys

from dotenv import load_dotenv

from planka_mcp.logging.logger import log_environment, setup_logger
from planka_mcp.settings import PlankaSettings, ServerSettings
from planka_mcp.version import VERSION


def main() -> None:
    load_dotenv()
    logger = setup_logger()

    try:
        settings = PlankaSettings()
        setup_logger(level=settings.log_level)
        logger.info("Creating planka-mcp server, version %s", VERSION)
        log_environment(logger, settings)

        server_settings = ServerSettings()
        if server_settings.server_type == "http":
            from planka_mcp import http_probe

            http_probe.run(server_settings.http_port)
        else:
            import planka_mcp.tools  # noqa: F401 registers all tools with the server
            from planka_mcp.server import mcp

            logger.info("Starting planka-mcp in stdio mode")
            mcp.run()
    except Exception:
        logger.exception("Error starting server")
        sys.exit(1)


if __name__ == "__main__":
    main()
