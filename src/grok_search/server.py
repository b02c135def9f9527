"""MCP server exposing the Grok Search tools over stdio."""

from __future__ import annotations

import logging
from typing import Any

import mcp.types as mcp_types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from grok_search import __version__
from grok_search.format import format_json
from grok_search.tools import ToolRegistry
from grok_search.types import ToolResult

_logger = logging.getLogger(__name__)

SERVER_NAME = "grok-search"


def to_call_result(tool_name: str, result: ToolResult) -> mcp_types.CallToolResult:
    """Render a ToolResult as MCP content; failures become ``{error, tool}``."""
    if result.success:
        return mcp_types.CallToolResult(
            content=[mcp_types.TextContent(type="text", text=result.output)],
        )
    payload = format_json({"error": result.error, "tool": tool_name})
    return mcp_types.CallToolResult(
        content=[mcp_types.TextContent(type="text", text=payload)],
        isError=True,
    )


async def dispatch(
    registry: ToolRegistry, name: str, arguments: dict[str, Any] | None,
) -> mcp_types.CallToolResult:
    """Run one tool call end to end."""
    _logger.info("Tool call: %s", name)
    result = await registry.execute(name, arguments)
    if not result.success:
        _logger.warning("Tool %s returned an error: %s", name, result.error)
    return to_call_result(name, result)


def create_server(registry: ToolRegistry) -> Server:
    """Build the MCP server with list-tools and call-tool handlers."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[mcp_types.Tool]:
        return [
            mcp_types.Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema(),
            )
            for tool in registry.list_tools()
        ]

    # Arguments are checked by the registry so that errors come back as {error, tool}.
    @server.call_tool(validate_input=False)
    async def call_tool(
        name: str, arguments: dict[str, Any],
    ) -> mcp_types.CallToolResult:
        return await dispatch(registry, name, arguments)

    return server


async def serve(registry: ToolRegistry) -> None:
    """Serve *registry* on stdin/stdout until the client disconnects."""
    server = create_server(registry)
    async with stdio_server() as (read_stream, write_stream):
        _logger.info("Grok Search MCP server running on stdio")
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
