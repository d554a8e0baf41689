"""FastMCP server initialization for Reclaim MCP."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version

from mcp.server.fastmcp import FastMCP

from reclaim_mcp.client import ReclaimClient
from reclaim_mcp.config import ConfigError, ReclaimConfig
from reclaim_mcp.resources import TaskResources
from reclaim_mcp.tools.actions import TaskActionTools
from reclaim_mcp.tools.crud import TaskCrudTools

logger = logging.getLogger(__name__)

SERVER_NAME = "reclaim_mcp"


def server_version() -> str:
    try:
        return version("reclaim-mcp")
    except PackageNotFoundError:
        return "0.0.0"


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr; stdout carries the stdio MCP transport."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _log_uncaught(exc_type, exc_value, exc_tb) -> None:
    logger.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_tb))


def client_lifespan(client: ReclaimClient):
    """Build a FastMCP lifespan that closes the API client when the server shuts down."""

    @asynccontextmanager
    async def lifespan(server: FastMCP) -> AsyncIterator[None]:
        try:
            yield
        finally:
            logger.debug("Closing Reclaim API client")
            await client.aclose()

    return lifespan


def create_server(config: ReclaimConfig, client: ReclaimClient | None = None) -> FastMCP:
    """
    Build the MCP server with all Reclaim tools and resources registered.

    A client built here is closed with the server; an injected client stays
    owned by the caller.

    Args:
        config: Server configuration
        client: Optional pre-built API client (tests inject one backed by a mock transport)

    Returns:
        FastMCP instance ready to run
    """
    if client is None:
        client = ReclaimClient(config)
        mcp = FastMCP(SERVER_NAME, lifespan=client_lifespan(client))
    else:
        mcp = FastMCP(SERVER_NAME)

    TaskActionTools(mcp, client)
    TaskCrudTools(mcp, client)
    TaskResources(mcp, client)

    logger.debug("Registered Reclaim tools and resources on %s", SERVER_NAME)
    return mcp


def run() -> None:
    """Run the MCP server over stdio."""
    try:
        config = ReclaimConfig.from_env()
    except ConfigError as e:
        configure_logging()
        logger.critical("FATAL: %s", e)
        sys.exit(1)

    configure_logging(config.log_level)
    sys.excepthook = _log_uncaught

    logger.info("Starting %s v%s", SERVER_NAME, server_version())
    create_server(config).run()


if __name__ == "__main__":
    run()
