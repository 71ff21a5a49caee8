"""Entrypoint for the gcloud MCP server."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

if __package__ in (None, ""):
    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))  # pragma: no cover

from gcloud_mcp import __version__
from gcloud_mcp.config import load_settings
from gcloud_mcp.execution import Executor
from gcloud_mcp.logging_utils import configure_logging
from gcloud_mcp.mcp_runtime import MCPServer
from gcloud_mcp.tools import register_tools

SERVER_NAME = "gcloud-mcp"

logger = logging.getLogger(__name__)


def build_server() -> MCPServer:
    """Create and configure the MCP server instance."""

    settings = load_settings()
    configure_logging()

    server = MCPServer(
        name=SERVER_NAME,
        version=__version__,
        instructions=settings.server.instructions,
    )

    logger.info("Initializing %s v%s", SERVER_NAME, __version__)
    logger.info(
        "gcloud: path=%s project=%s region=%s zone=%s timeout=%ss",
        settings.gcloud.gcloud_path,
        settings.gcloud.project or "<gcloud default>",
        settings.gcloud.region or "<gcloud default>",
        settings.gcloud.zone or "<gcloud default>",
        settings.gcloud.command_timeout_seconds,
    )
    register_tools(server, Executor(settings.gcloud))
    return server


def run_entrypoint() -> None:
    """Serve MCP over stdio until stdin closes."""
    server = build_server()
    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":  # pragma: no cover
    run_entrypoint()
