"""Web search and web fetch tools."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlparse

from grok_search.errors import ToolArgumentError
from grok_search.format import parse_search_results
from grok_search.tools.base import GrokTool
from grok_search.types import ToolParameter, ToolResult

_logger = logging.getLogger(__name__)


class WebSearchTool(GrokTool):
    name = "web_search"
    description = (
        "Run a web search and return structured results.\n\n"
        "- Aggregates information from multiple sources\n"
        "- Returns results with title, link and summary\n"
        "- Optionally focuses on a platform and bounds the number of results"
    )
    parameters = [
        ToolParameter(
            name="query", type="string", description="Search query",
        ),
        ToolParameter(
            name="platform", type="string",
            description='Platform to focus on, e.g. "github", "stackoverflow"',
            required=False,
        ),
        ToolParameter(
            name="min_results", type="integer",
            description="Minimum number of results", required=False, default=3,
        ),
        ToolParameter(
            name="max_results", type="integer",
            description="Maximum number of results", required=False, default=10,
        ),
    ]

    async def execute(self, **kwargs: Any) -> ToolResult:
        query: str = kwargs["query"]
        platform: str = kwargs.get("platform") or ""
        min_results: int = kwargs.get("min_results", 3)
        max_results: int = kwargs.get("max_results", 10)

        settings = self.store.resolve()
        _logger.debug("Begin Search: %s", query)
        async with self.provider_factory(settings) as provider:
            text = await provider.search(query, platform, min_results, max_results)

        hits = len(parse_search_results(text))
        _logger.debug("Search Finished! (%d parsed results, model %s)", hits, settings.model)
        return ToolResult(success=True, output=text)


class WebFetchTool(GrokTool):
    name = "web_fetch"
    description = (
        "Fetch the full content of a URL as a structured Markdown document.\n\n"
        "- Extracts text, images, links, tables and code blocks\n"
        "- Keeps the hierarchy and formatting of the original page\n"
        "- Drops scripts, styles and other non-content elements"
    )
    parameters = [
        ToolParameter(
            name="url", type="string",
            description="Page URL to fetch; must be an http or https address",
        ),
    ]

    async def execute(self, **kwargs: Any) -> ToolResult:
        url: str = kwargs["url"].strip()
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ToolArgumentError(f"Argument 'url' must be an http(s) URL: {url}")

        settings = self.store.resolve()
        _logger.debug("Begin Fetch: %s", url)
        async with self.provider_factory(settings) as provider:
            text = await provider.fetch(url)
        _logger.debug("Fetch Finished!")
        return ToolResult(success=True, output=text)
