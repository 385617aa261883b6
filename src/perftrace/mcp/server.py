"""FastMCP server creation and wiring.

Logging:
- Two-phase tool logging: tool_start with params, tool_complete with summary
- One request id per tool call, attached to every log line it produces
- Unexpected handler exceptions: error summary, full traceback at DEBUG
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import structlog
from fastmcp.utilities.json_schema import dereference_refs
from pydantic import BaseModel, Field

from perftrace.core.logging import clear_request_id, set_request_id

if TYPE_CHECKING:
    from fastmcp import FastMCP

    from perftrace.mcp.context import AppContext
    from perftrace.mcp.registry import ToolSpec

log = structlog.get_logger(__name__)

SERVER_NAME = "perftrace"
SERVER_INSTRUCTIONS = (
    "Performance trace recording for a browser page. Start a trace, stop it, "
    "then query the latest recording by insight, event key, or time bounds."
)


class ToolResponse(BaseModel):
    """Standardized tool response envelope."""

    result: Any = None
    meta: dict[str, Any] = Field(default_factory=dict)
    success: bool
    error: str | None = None


def _extract_log_params(kwargs: dict[str, Any]) -> dict[str, Any]:
    """Key params for the tool_start log line, with long strings truncated."""
    params: dict[str, Any] = {}
    for key, value in kwargs.items():
        if isinstance(value, str) and len(value) > 50:
            params[key] = value[:50] + "..."
        elif value is not None:
            params[key] = value
    return params


def _extract_result_summary(result: dict[str, Any]) -> dict[str, Any]:
    """Summary metrics from a tool result for the tool_complete log line."""
    summary: dict[str, Any] = {}
    if isinstance(result.get("lines"), list):
        summary["lines"] = len(result["lines"])
    if "error" in result and isinstance(result["error"], dict):
        summary["error"] = result["error"].get("error")
    return summary


def create_mcp_server(context: AppContext) -> FastMCP:
    """Create FastMCP server with all tools wired to context.

    Args:
        context: AppContext owning the trace session

    Returns:
        Configured FastMCP server ready to run
    """
    from fastmcp import FastMCP

    from perftrace.mcp.registry import registry

    # Import tools to trigger registration
    from perftrace.mcp.tools import performance  # noqa: F401

    log.info("mcp_server_creating")

    mcp = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS)

    tool_count = 0
    for spec in registry.get_all():
        _wire_tool(mcp, spec, context)
        tool_count += 1

    log.info("mcp_server_created", tool_count=tool_count)

    return mcp


def _make_handler(spec: ToolSpec, context: AppContext) -> Any:
    """Build the kwargs handler that validates params and wraps the result."""
    from pydantic import ValidationError

    params_model = spec.params_model
    spec_handler = spec.handler

    async def handler(**kwargs: Any) -> dict[str, Any]:
        tool_name = spec.name
        request_id = set_request_id()
        start_time = time.perf_counter()

        log.info("tool_start", tool=tool_name, **_extract_log_params(kwargs))

        try:
            try:
                params = params_model(**kwargs)
            except ValidationError as e:
                # User input error - no traceback needed
                message = e.errors()[0]["msg"] if e.errors() else str(e)
                elapsed_ms = int((time.perf_counter() - start_time) * 1000)
                log.warning(
                    "tool_validation_error",
                    tool=tool_name,
                    error=message,
                    elapsed_ms=elapsed_ms,
                )
                error_text = f"Validation error: {message}"
                return ToolResponse(
                    success=False,
                    result={"lines": [error_text], "text": error_text},
                    error=error_text,
                    meta={
                        "request_id": request_id,
                        "error_type": "validation",
                        "validation_errors": [
                            {"field": ".".join(str(x) for x in err["loc"]), "message": err["msg"]}
                            for err in e.errors()[:5]
                        ],
                    },
                ).model_dump()

            try:
                result_data: dict[str, Any] = await spec_handler(context, params)
            except Exception as e:
                # Internal error - summary at ERROR, full traceback at DEBUG
                elapsed_ms = int((time.perf_counter() - start_time) * 1000)
                log.error(
                    "tool_internal_error",
                    tool=tool_name,
                    error=str(e),
                    elapsed_ms=elapsed_ms,
                )
                log.debug("tool_internal_error_traceback", tool=tool_name, exc_info=True)
                error_text = str(e) or type(e).__name__
                return ToolResponse(
                    success=False,
                    result={"lines": [f"Error: {error_text}"], "text": f"Error: {error_text}"},
                    error=error_text,
                    meta={"request_id": request_id},
                ).model_dump()

            elapsed_ms = int((time.perf_counter() - start_time) * 1000)
            log.info(
                "tool_complete",
                tool=tool_name,
                elapsed_ms=elapsed_ms,
                **_extract_result_summary(result_data),
            )

            return ToolResponse(
                success=True,
                result=result_data,
                meta={
                    "request_id": request_id,
                    "timestamp": int(time.time() * 1000),
                },
            ).model_dump()
        finally:
            clear_request_id()

    return handler


def _wire_tool(mcp: FastMCP, spec: ToolSpec, context: AppContext) -> None:
    """Wire a single tool spec to FastMCP.

    The params model's fields become direct tool parameters so FastMCP
    exposes a flat schema compatible with all MCP clients.
    """
    from fastmcp.tools import FunctionTool
    from mcp.types import ToolAnnotations

    # dereference_refs inlines all $refs and removes $defs
    flat_schema = dereference_refs(spec.params_model.model_json_schema())

    tool = FunctionTool(
        name=spec.name,
        description=spec.description,
        parameters=flat_schema,
        fn=_make_handler(spec, context),
        tags={spec.category} if spec.category else set(),
        annotations=ToolAnnotations(readOnlyHint=spec.read_only),
    )

    mcp.add_tool(tool)
