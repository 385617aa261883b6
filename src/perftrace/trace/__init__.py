"""Trace recording session: lifecycle, history, and query resolution."""

from perftrace.trace.bounds import resolve_bounds
from perftrace.trace.controller import TraceSessionController
from perftrace.trace.events import ResolvedEvent, latest_trace, resolve_event
from perftrace.trace.history import TraceHistory
from perftrace.trace.models import (
    Bounds,
    EventKey,
    ParsedTraceResult,
    RecordedTrace,
    SessionStatus,
    TraceParseFailure,
    TraceSession,
)
from perftrace.trace.protocols import (
    AnalysisFocus,
    InsightOutput,
    PageDriver,
    TraceEngine,
    TraceFormatter,
)
from perftrace.trace.reports import ReportDispatcher

__all__ = [
    "AnalysisFocus",
    "Bounds",
    "EventKey",
    "InsightOutput",
    "PageDriver",
    "ParsedTraceResult",
    "RecordedTrace",
    "ReportDispatcher",
    "ResolvedEvent",
    "SessionStatus",
    "TraceEngine",
    "TraceFormatter",
    "TraceHistory",
    "TraceParseFailure",
    "TraceSession",
    "TraceSessionController",
    "latest_trace",
    "resolve_bounds",
    "resolve_event",
]
