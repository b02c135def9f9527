"""Async Tool abstract base class for Grok Search."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from grok_search.config import ConfigStore, Settings
from grok_search.errors import ToolArgumentError
from grok_search.llm.client import GrokSearchProvider
from grok_search.types import ToolParameter, ToolResult

ProviderFactory = Callable[[Settings], GrokSearchProvider]

_PYTHON_TYPES: dict[str, type | tuple[type, ...]] = {
    "string": str,
    "integer": int,
    "number": (int, float),
    "boolean": bool,
}


def default_provider_factory(settings: Settings) -> GrokSearchProvider:
    """Build a provider with its own HTTP client from resolved settings."""
    return GrokSearchProvider(
        api_url=settings.api_url,
        api_key=settings.api_key.get_secret_value(),
        model=settings.model,
    )


class Tool(ABC):
    """Base class for all tools.

    Subclasses must set ``name``, ``description``, ``parameters`` as class
    attributes and implement the async ``execute()`` method.
    """

    name: str
    description: str
    parameters: list[ToolParameter]

    @abstractmethod
    async def execute(self, **kwargs: Any) -> ToolResult:
        """Execute the tool asynchronously."""

    def input_schema(self) -> dict[str, Any]:
        """JSON Schema for the tool's arguments."""
        properties: dict[str, Any] = {}
        required: list[str] = []
        for p in self.parameters:
            prop: dict[str, Any] = {
                "type": p.type,
                "description": p.description,
            }
            if p.enum:
                prop["enum"] = p.enum
            if p.default is not None:
                prop["default"] = p.default
            properties[p.name] = prop
            if p.required:
                required.append(p.name)

        schema: dict[str, Any] = {"type": "object", "properties": properties}
        if required:
            schema["required"] = required
        return schema

    def bind_arguments(self, arguments: dict[str, Any] | None) -> dict[str, Any]:
        """Check *arguments* against ``parameters`` and fill in defaults.

        Raises :class:`ToolArgumentError` on a missing required argument or a
        wrongly typed value.  Unknown arguments are dropped.
        """
        arguments = arguments or {}
        bound: dict[str, Any] = {}
        for p in self.parameters:
            value = arguments.get(p.name)
            if value is None:
                if p.required:
                    raise ToolArgumentError(
                        f"Argument '{p.name}' must be a non-empty {p.type}"
                    )
                if p.default is not None:
                    bound[p.name] = p.default
                continue

            # JSON clients may send 5.0 for 5
            if p.type == "integer" and isinstance(value, float) and value.is_integer():
                value = int(value)
            expected = _PYTHON_TYPES.get(p.type)
            # bool is an int subclass; reject it for numeric parameters
            wrong_bool = isinstance(value, bool) and p.type in ("integer", "number")
            if expected is not None and (not isinstance(value, expected) or wrong_bool):
                raise ToolArgumentError(
                    f"Argument '{p.name}' must be of type {p.type}, "
                    f"got {type(value).__name__}"
                )
            if p.type == "string" and p.required and not value.strip():
                raise ToolArgumentError(
                    f"Argument '{p.name}' must be a non-empty string"
                )
            if p.enum and p.enforce_enum and value not in p.enum:
                raise ToolArgumentError(
                    f"Argument '{p.name}' must be one of: {', '.join(p.enum)}"
                )
            bound[p.name] = value
        return bound


class GrokTool(Tool):
    """A tool that needs settings and, usually, a provider.

    Parameters
    ----------
    store:
        Source of :class:`Settings`; resolved once per call.
    provider_factory:
        Builds a :class:`GrokSearchProvider` from settings.  Injected by tests.
    """

    def __init__(
        self,
        store: ConfigStore,
        provider_factory: ProviderFactory | None = None,
    ) -> None:
        self.store = store
        self.provider_factory = provider_factory or default_provider_factory
