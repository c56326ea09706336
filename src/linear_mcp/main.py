"""Console entry point: serve the Linear tools over MCP stdio."""

import asyncio
import logging

from .config import get_settings
from .exceptions import ConfigurationError
from .graphql.http_client import close_http_client
from .mcp.server import LinearMCPServer
from .observability.logging import configure_logging

logger = logging.getLogger(__name__)


async def serve():
    settings = get_settings()
    server = LinearMCPServer.from_settings(settings)
    logger.info("%s v%s serving over stdio", settings.app_name, settings.app_version)
    try:
        await server.run_stdio()
    finally:
        await close_http_client()
        logger.info("Shutdown complete")


def main():
    settings = get_settings()
    configure_logging(environment=settings.environment, log_level=settings.log_level)
    try:
        asyncio.run(serve())
    except ConfigurationError as e:
        logger.error("Startup failed: %s", e)
        raise SystemExit(1)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
