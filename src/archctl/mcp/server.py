"""MCP server setup — stdio transport over the SDK's low-level server.

The SDK only frames and routes; tool listing and argument validation
come from :class:`ToolRegistry`, so the SDK's own input-schema check is
disabled. Each call is dispatched on a worker thread so a long
``go test`` run never blocks the session.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import anyio
import anyio.to_thread
import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from archctl import __version__
from archctl.mcp.registry import ToolRegistry, ToolRequest

if TYPE_CHECKING:
    from archctl.config.settings import ArchSettings
    from archctl.infrastructure.runner import Runner

__all__ = ["ToolCallFailed", "call_tool", "create_server", "run_stdio", "tool_definitions"]

logger = logging.getLogger(__name__)


class ToolCallFailed(Exception):
    """Error ToolResult content on its way to the client.

    The SDK converts exceptions raised by a call handler into a result
    with ``isError: true`` and ``str(exc)`` as its text.
    """


def tool_definitions(registry: ToolRegistry) -> list[types.Tool]:
    """MCP tool listing derived from the registry's schemas."""
    return [
        types.Tool(name=name, description=schema.description, inputSchema=schema.input_schema())
        for name, schema in registry.tools()
    ]


async def call_tool(
    registry: ToolRegistry, name: str, arguments: dict[str, Any] | None
) -> list[types.TextContent]:
    """Dispatch one call; error results are raised as :class:`ToolCallFailed`."""
    request = ToolRequest(name=name, arguments=dict(arguments or {}))
    result = await anyio.to_thread.run_sync(registry.dispatch, request)
    if result.is_error:
        raise ToolCallFailed(result.content)
    return [types.TextContent(type="text", text=result.content)]


def create_server(registry: ToolRegistry, *, name: str = "goarchtest-analyzer") -> Server:
    """Create a low-level MCP server exposing every tool in *registry*."""
    server: Server = Server(name, version=__version__)

    @server.list_tools()  # type: ignore[untyped-decorator]
    async def list_tools() -> list[types.Tool]:
        return tool_definitions(registry)

    @server.call_tool(validate_input=False)  # type: ignore[untyped-decorator]
    async def handle_call_tool(tool: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        return await call_tool(registry, tool, arguments)

    return server


async def _serve_stdio(server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run_stdio(settings: ArchSettings, *, runner: Runner | None = None) -> None:
    """Serve tools for ``settings.project_root`` until stdin closes."""
    from archctl.infrastructure.workspace import Workspace
    from archctl.mcp.tools import build_registry

    with Workspace(settings, runner=runner) as workspace:
        server = create_server(build_registry(workspace), name=settings.mcp.server_name)
        logger.info("archctl MCP server running for %s", settings.project_root)
        anyio.run(_serve_stdio, server)
