"""Grok Search: web search and web fetch over MCP, backed by the Grok API."""

__version__ = "1.0.0"
