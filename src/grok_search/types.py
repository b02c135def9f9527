"""Shared data types for Grok Search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Tool types
# ---------------------------------------------------------------------------

@dataclass
class ToolParameter:
    """Definition of a tool parameter."""

    name: str
    type: str  # string, integer, boolean
    description: str
    required: bool = True
    default: Any = None
    enum: list[str] | None = None
    enforce_enum: bool = True


@dataclass
class ToolResult:
    """Result of a tool execution."""

    success: bool
    output: str
    error: str = ""


# ---------------------------------------------------------------------------
# Search types
# ---------------------------------------------------------------------------

class SearchResult(BaseModel):
    """One hit from the JSON array the search prompt asks the model for."""

    title: str
    url: str
    description: str = ""
    snippet: str | None = None
    source: str | None = None
    published_date: str | None = None
