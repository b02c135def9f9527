"""Configuration tools: inspect settings, switch model, built-in tool toggle."""

from __future__ import annotations

import logging
from typing import Any

from grok_search.format import format_json
from grok_search.tools.base import GrokTool
from grok_search.types import ToolParameter, ToolResult

_logger = logging.getLogger(__name__)

KNOWN_MODELS = ["grok-4-fast", "grok-2-latest", "grok-vision-beta"]

BUILTIN_DENY_LIST = ["WebSearch", "WebFetch"]
CLAUDE_DESKTOP_CONFIG = "~/.config/claude/claude_desktop_config.json"


class GetConfigInfoTool(GrokTool):
    name = "get_config_info"
    description = (
        "Show the Grok Search configuration and test the API connection.\n\n"
        "- Current API URL and model\n"
        "- Connection test against the API with response time and model count\n"
        "- Reports configuration errors"
    )
    parameters: list[ToolParameter] = []

    async def execute(self, **kwargs: Any) -> ToolResult:
        valid, error = self.store.validate()
        info: dict[str, Any] = {
            "api_url": self.store.api_url,
            "api_key_prefix": None,
            "model": self.store.current_model(),
            "status": "valid" if valid else "invalid",
            "test_result": None,
            "config_file": str(self.store.config_file),
            "log_dir": str(self.store.log_dir),
        }
        if not valid:
            info["error"] = error
            return ToolResult(success=True, output=format_json(info))

        settings = self.store.resolve()
        info["api_key_prefix"] = settings.api_key_prefix
        async with self.provider_factory(settings) as provider:
            info["test_result"] = await provider.probe_models()
        return ToolResult(success=True, output=format_json(info))


class SwitchModelTool(GrokTool):
    name = "switch_model"
    description = (
        "Switch the Grok model used by web_search and web_fetch and save the "
        "choice.\n\n"
        f"Known models: {', '.join(KNOWN_MODELS)}"
    )
    parameters = [
        ToolParameter(
            name="model", type="string", description="Model ID",
            enum=KNOWN_MODELS, enforce_enum=False,
        ),
    ]

    async def execute(self, **kwargs: Any) -> ToolResult:
        model: str = kwargs["model"].strip()
        previous = self.store.current_model()
        self.store.persist_model_choice(model)
        result = {
            "status": "success",
            "previous_model": previous,
            "current_model": model,
            "message": f"Model switched from {previous} to {model}",
            "config_file": str(self.store.config_file),
        }
        return ToolResult(success=True, output=format_json(result))


class ToggleBuiltinToolsTool(GrokTool):
    """Reports what blocking the client's built-in web tools would do.

    The client configuration file is not modified.
    """

    name = "toggle_builtin_tools"
    description = (
        "Disable or re-enable the client's built-in WebSearch/WebFetch tools "
        "so that searches are routed to Grok Search.\n\n"
        '- action: "on" blocks the built-in tools, "off" unblocks them, '
        '"status" shows the current state'
    )
    parameters = [
        ToolParameter(
            name="action", type="string", description="Action to perform",
            required=False, default="status", enum=["on", "off", "status"],
        ),
    ]

    async def execute(self, **kwargs: Any) -> ToolResult:
        action: str = kwargs.get("action", "status")
        blocked = action == "on"
        if action == "on":
            message = "Built-in WebSearch/WebFetch tools are blocked"
        elif action == "off":
            message = "Built-in WebSearch/WebFetch tools are enabled"
        else:
            message = "Current state: built-in tools enabled"
        result = {
            "blocked": blocked,
            "deny_list": list(BUILTIN_DENY_LIST),
            "file": CLAUDE_DESKTOP_CONFIG,
            "message": message,
        }
        return ToolResult(success=True, output=format_json(result))
