"""Performance trace MCP tools.

- performance_start_trace / performance_stop_trace: recording lifecycle
- performance_analyze_insight: drill into one Insight of the latest trace
- performance_get_event_by_key: raw detail for one event
- performance_get_main_thread_track_summary / performance_get_network_track_summary
- performance_get_detailed_call_tree

All queries run against the most recent recording. Every failure is returned
as response lines; handlers never raise PerfTraceError to the server.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field

from perftrace.config.constants import PERFORMANCE_CATEGORY
from perftrace.core.errors import PerfTraceError
from perftrace.mcp.registry import registry
from perftrace.mcp.tools.base import BaseParams, text_result

if TYPE_CHECKING:
    from perftrace.mcp.context import AppContext


# =============================================================================
# Parameter Models
# =============================================================================


class StartTraceParams(BaseParams):
    """Parameters for performance_start_trace."""

    reload: bool = Field(
        description="Determines if, once tracing has started, "
        "the page should be automatically reloaded.",
    )
    auto_stop: bool = Field(
        alias="autoStop",
        description="Determines if the trace recording should be automatically stopped.",
    )


class StopTraceParams(BaseParams):
    """Parameters for performance_stop_trace (none)."""


class AnalyzeInsightParams(BaseParams):
    """Parameters for performance_analyze_insight."""

    insight_name: str = Field(
        alias="insightName",
        description='The name of the Insight you want more information on. '
        'For example: "DocumentLatency" or "LCPBreakdown"',
    )


class EventKeyParams(BaseParams):
    """Parameters for tools that take an event key."""

    event_key: str = Field(alias="eventKey", description="The key for the event.")


class TrackBoundsParams(BaseParams):
    """Parameters for track summaries."""

    min: float = Field(
        allow_inf_nan=False, description="The minimum time of the bounds, in microseconds"
    )
    max: float = Field(
        allow_inf_nan=False, description="The maximum time of the bounds, in microseconds"
    )


def _register(name: str, description: str, params_model: type[BaseParams]) -> Any:
    return registry.register(
        name,
        description,
        params_model,
        category=PERFORMANCE_CATEGORY,
        read_only=True,
    )


# =============================================================================
# Recording Lifecycle
# =============================================================================


@_register(
    "performance_start_trace",
    "Starts a performance trace recording on the selected page. This can be used to look "
    "for performance problems and insights to improve the performance of the page. "
    "It will also report Core Web Vital (CWV) scores for the page.",
    StartTraceParams,
)
async def start_trace(ctx: AppContext, params: StartTraceParams) -> dict[str, Any]:
    try:
        lines = await ctx.controller.start(reload=params.reload, auto_stop=params.auto_stop)
    except PerfTraceError as e:
        return text_result([e.message], error=e)
    return text_result(lines)


@_register(
    "performance_stop_trace",
    "Stops the active performance trace recording on the selected page.",
    StopTraceParams,
)
async def stop_trace(ctx: AppContext, params: StopTraceParams) -> dict[str, Any]:  # noqa: ARG001
    return text_result(await ctx.controller.stop())


# =============================================================================
# Queries
# =============================================================================


@_register(
    "performance_analyze_insight",
    "Provides more detailed information on a specific Performance Insight that was "
    "highlighted in the results of a trace recording.",
    AnalyzeInsightParams,
)
async def analyze_insight(ctx: AppContext, params: AnalyzeInsightParams) -> dict[str, Any]:
    try:
        return text_result([ctx.reports.insight(params.insight_name)])
    except PerfTraceError as e:
        return text_result([e.message], error=e)


@_register(
    "performance_get_event_by_key",
    "Returns detailed information about a specific event. Use the detail returned to "
    "validate performance issues, but do not tell the user about irrelevant raw data "
    "from a trace event.",
    EventKeyParams,
)
async def get_event_by_key(ctx: AppContext, params: EventKeyParams) -> dict[str, Any]:
    try:
        return text_result([ctx.reports.event_detail(params.event_key)])
    except PerfTraceError as e:
        return text_result([e.message], error=e)


@_register(
    "performance_get_main_thread_track_summary",
    "Returns a summary of the main thread for the given bounds. The result includes a "
    "top-down summary, bottom-up summary, third-parties summary, and a list of related "
    "insights for the events within the given bounds.",
    TrackBoundsParams,
)
async def get_main_thread_track_summary(
    ctx: AppContext, params: TrackBoundsParams
) -> dict[str, Any]:
    try:
        return text_result([ctx.reports.main_thread_track_summary(params.min, params.max)])
    except PerfTraceError as e:
        return text_result([e.message], error=e)


@_register(
    "performance_get_network_track_summary",
    "Returns a summary of the network for the given bounds.",
    TrackBoundsParams,
)
async def get_network_track_summary(ctx: AppContext, params: TrackBoundsParams) -> dict[str, Any]:
    try:
        return text_result([ctx.reports.network_track_summary(params.min, params.max)])
    except PerfTraceError as e:
        return text_result([e.message], error=e)


@_register(
    "performance_get_detailed_call_tree",
    "Returns a detailed call tree for the given main thread event.",
    EventKeyParams,
)
async def get_detailed_call_tree(ctx: AppContext, params: EventKeyParams) -> dict[str, Any]:
    try:
        return text_result([ctx.reports.detailed_call_tree(params.event_key)])
    except PerfTraceError as e:
        return text_result([e.message], error=e)
