"""Tool system for Grok Search."""

from __future__ import annotations

from grok_search.config import ConfigStore
from grok_search.tools.admin import (
    GetConfigInfoTool,
    SwitchModelTool,
    ToggleBuiltinToolsTool,
)
from grok_search.tools.base import GrokTool, ProviderFactory, Tool
from grok_search.tools.registry import ToolRegistry
from grok_search.tools.search import WebFetchTool, WebSearchTool


def build_registry(
    store: ConfigStore,
    provider_factory: ProviderFactory | None = None,
) -> ToolRegistry:
    """Registry with every Grok Search tool, sharing one config store."""
    registry = ToolRegistry()
    for tool_cls in (
        WebSearchTool,
        WebFetchTool,
        GetConfigInfoTool,
        SwitchModelTool,
        ToggleBuiltinToolsTool,
    ):
        registry.register(tool_cls(store, provider_factory))
    return registry


__all__ = [
    "GrokTool",
    "Tool",
    "ToolRegistry",
    "build_registry",
]
