"""Tests for the MCP surface."""

from __future__ import annotations

import json
from importlib.metadata import version

import mcp.types as mcp_types
from mcp.server import Server

from grok_search.config import ConfigStore
from grok_search.server import SERVER_NAME, create_server, dispatch, to_call_result
from grok_search.tools import build_registry
from grok_search.types import ToolResult


def _registry(tmp_path, **env: str):
    return build_registry(ConfigStore(tmp_path / "config.json", env=dict(env)))


class TestToCallResult:
    def test_success_is_plain_text(self):
        result = to_call_result("web_search", ToolResult(success=True, output="answer"))
        assert result.isError is False
        assert result.content[0].type == "text"
        assert result.content[0].text == "answer"

    def test_failure_is_structured_error(self):
        result = to_call_result("web_fetch", ToolResult(success=False, output="", error="bad url"))
        assert result.isError is True
        assert json.loads(result.content[0].text) == {"error": "bad url", "tool": "web_fetch"}


class TestDispatch:
    async def test_unknown_tool(self, tmp_path):
        result = await dispatch(_registry(tmp_path), "does_not_exist", {})
        assert result.isError is True
        body = json.loads(result.content[0].text)
        assert body["tool"] == "does_not_exist"
        assert "Unknown tool" in body["error"]

    async def test_missing_key_does_not_raise(self, tmp_path):
        result = await dispatch(_registry(tmp_path), "web_search", {"query": "q"})
        assert result.isError is True
        assert "GROK_API_KEY" in json.loads(result.content[0].text)["error"]

    async def test_switch_model_roundtrip(self, tmp_path):
        result = await dispatch(
            _registry(tmp_path, GROK_API_KEY="k"), "switch_model", {"model": "grok-2-latest"},
        )
        assert result.isError is False
        assert json.loads(result.content[0].text)["current_model"] == "grok-2-latest"
        assert json.loads((tmp_path / "config.json").read_text()) == {"model": "grok-2-latest"}


class TestCreateServer:
    def test_sdk_is_1x(self):
        # decorators and CallToolResult.isError below are the 1.x low-level API
        assert int(version("mcp").split(".")[0]) == 1

    def test_server_name(self, tmp_path):
        server = create_server(_registry(tmp_path))
        assert isinstance(server, Server)
        assert server.name == SERVER_NAME

    async def test_list_tools_handler(self, tmp_path):
        server = create_server(_registry(tmp_path))
        handler = server.request_handlers[mcp_types.ListToolsRequest]

        response = await handler(mcp_types.ListToolsRequest(method="tools/list"))

        tools = {t.name: t for t in response.root.tools}
        assert set(tools) == {
            "web_search", "web_fetch", "get_config_info", "switch_model", "toggle_builtin_tools",
        }
        assert tools["web_search"].inputSchema["required"] == ["query"]
        assert tools["switch_model"].inputSchema["properties"]["model"]["enum"] == [
            "grok-4-fast", "grok-2-latest", "grok-vision-beta",
        ]
        assert "required" not in tools["get_config_info"].inputSchema
