"""Tool registry for MCP server.

Provides decorator-based tool registration with Pydantic param validation.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

if TYPE_CHECKING:
    from perftrace.mcp.context import AppContext

# Handler signature: (ctx, validated_params) -> dict
HandlerFn = Callable[["AppContext", Any], Awaitable[dict[str, Any]]]


@dataclass
class ToolSpec:
    """Specification for a registered tool."""

    name: str
    handler: HandlerFn
    description: str
    params_model: type[BaseModel]
    category: str | None = None
    read_only: bool = False


class ToolRegistry:
    """Registry for MCP tools with decorator-based registration."""

    _instance: ToolRegistry | None = None
    _tools: dict[str, ToolSpec]

    def __new__(cls) -> ToolRegistry:
        """Singleton pattern for global registry."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._tools = {}
        return cls._instance

    def register(
        self,
        name: str,
        description: str,
        params_model: type[BaseModel],
        *,
        category: str | None = None,
        read_only: bool = False,
    ) -> Callable[[HandlerFn], HandlerFn]:
        """Decorator to register a tool handler.

        Usage:
            @registry.register("performance_stop_trace", "Stop tracing", StopTraceParams)
            async def stop_trace(ctx: AppContext, params: StopTraceParams) -> dict:
                ...
        """

        def decorator(fn: HandlerFn) -> HandlerFn:
            self._tools[name] = ToolSpec(
                name=name,
                handler=fn,
                description=description,
                params_model=params_model,
                category=category,
                read_only=read_only,
            )
            return fn

        return decorator

    def get_all(self) -> list[ToolSpec]:
        """Get all registered tool specs."""
        return list(self._tools.values())

    def clear(self) -> None:
        """Clear all registrations (for testing)."""
        self._tools.clear()


# Global registry instance
registry = ToolRegistry()
