"""Tool registration helpers.

Each service module exposes a ``build_*_tools(executor)`` factory; the
handlers close over the shared :class:`~gcloud_mcp.execution.Executor`.
"""

from __future__ import annotations

from gcloud_mcp.execution import Executor
from gcloud_mcp.logging_utils import get_logger
from gcloud_mcp.mcp_runtime import MCPServer, ToolSpec
from gcloud_mcp.tools.cloud_logging import build_logging_tools
from gcloud_mcp.tools.compute import build_compute_tools
from gcloud_mcp.tools.pubsub import build_pubsub_tools
from gcloud_mcp.tools.run import build_run_tools
from gcloud_mcp.tools.secrets import build_secrets_tools

__all__ = ["get_tool_registry", "get_tool_specs", "register_tools"]


def get_tool_specs(executor: Executor) -> list[ToolSpec]:
    return [
        *build_run_tools(executor),
        *build_secrets_tools(executor),
        *build_compute_tools(executor),
        *build_logging_tools(executor),
        *build_pubsub_tools(executor),
    ]


def get_tool_registry(executor: Executor) -> dict[str, ToolSpec]:
    return {tool.name: tool for tool in get_tool_specs(executor)}


def register_tools(server: MCPServer, executor: Executor) -> None:
    """Register every gcloud tool with the MCP server."""
    logger = get_logger(__name__)

    tools = get_tool_specs(executor)
    for tool in tools:
        server.add_tool(tool)

    logger.info("Registered %d gcloud tools", len(tools))
