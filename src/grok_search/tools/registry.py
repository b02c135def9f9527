"""Tool registry: name lookup, argument checking and error capture."""

from __future__ import annotations

import logging
from typing import Any

from grok_search.errors import ToolArgumentError
from grok_search.tools.base import Tool
from grok_search.types import ToolResult

_logger = logging.getLogger(__name__)


class ToolRegistry:
    """Registry of available tools with async execution."""

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """Register a tool instance."""
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool | None:
        """Look up a tool by name."""
        return self._tools.get(name)

    def list_tools(self) -> list[Tool]:
        """Return all registered tools."""
        return list(self._tools.values())

    def tool_names(self) -> list[str]:
        """Return list of registered tool names."""
        return list(self._tools.keys())

    async def execute(
        self, tool_name: str, arguments: dict[str, Any] | None = None,
    ) -> ToolResult:
        """Execute a tool by name with the given arguments.

        Never raises: unknown tools, bad arguments and exceptions from the
        tool all come back as a failed ToolResult.
        """
        tool = self._tools.get(tool_name)
        if tool is None:
            return ToolResult(
                success=False,
                output="",
                error=f"Unknown tool: {tool_name}. Available: {', '.join(self._tools.keys())}",
            )
        try:
            kwargs = tool.bind_arguments(arguments)
        except ToolArgumentError as e:
            _logger.info("Rejected call to %s: %s", tool_name, e)
            return ToolResult(success=False, output="", error=str(e))

        try:
            return await tool.execute(**kwargs)
        except Exception as e:
            _logger.error("Tool %s failed: %s: %s", tool_name, type(e).__name__, e)
            return ToolResult(
                success=False,
                output="",
                error=str(e) or type(e).__name__,
            )
