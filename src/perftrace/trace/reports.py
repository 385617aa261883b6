"""Report dispatch: turn resolved queries into engine-formatted text.

Every query runs against ``history.last()`` only. The formatter output is
returned verbatim.
"""

from __future__ import annotations

import dataclasses
import json
from typing import TYPE_CHECKING, Any

from perftrace.config.constants import NO_CALL_TREE_PLACEHOLDER
from perftrace.core.errors import InsightError, NoTraceRecordedError
from perftrace.trace.bounds import resolve_bounds
from perftrace.trace.events import ResolvedEvent, latest_trace, resolve_event
from perftrace.trace.models import EventKey

if TYPE_CHECKING:
    from perftrace.trace.history import TraceHistory
    from perftrace.trace.protocols import TraceEngine

NO_INSIGHT_TRACE_MESSAGE = (
    "No recorded traces found. Record a performance trace so you have Insights to analyze."
)


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    model_dump = getattr(value, "model_dump", None)
    if callable(model_dump):
        return model_dump()
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    return str(value)


def serialize_event(event: Any) -> str:
    """Pretty JSON for an engine event (dicts, dataclasses, pydantic models)."""
    return json.dumps(event, indent=2, default=_json_default)


class ReportDispatcher:
    """Resolves queries against the latest trace and formats the answer."""

    def __init__(self, engine: TraceEngine, history: TraceHistory) -> None:
        self._engine = engine
        self._history = history

    @property
    def history(self) -> TraceHistory:
        return self._history

    def _event(self, key: str | EventKey) -> ResolvedEvent:
        trace = latest_trace(self._history)
        if isinstance(key, str):
            key = EventKey.scoped_to(trace, key)
        focus = self._engine.create_focus(trace.parsed_trace)
        return resolve_event(trace, key, focus)

    def insight(self, name: str) -> str:
        trace = self._history.last()
        if trace is None:
            raise NoTraceRecordedError.create(NO_INSIGHT_TRACE_MESSAGE)
        result = self._engine.insight_output(trace.parsed_trace, trace.insights, name)
        if result.error is not None:
            raise InsightError.create(name, result.error)
        return result.output or ""

    def event_detail(self, key: str | EventKey) -> str:
        resolved = self._event(key)
        return f"Event:\n{serialize_event(resolved.event)}"

    def main_thread_track_summary(self, min_us: float | None, max_us: float | None) -> str:
        trace = latest_trace(self._history)
        bounds = resolve_bounds(trace, min_us, max_us)
        focus = self._engine.create_focus(trace.parsed_trace)
        return self._engine.create_formatter(focus).format_main_thread_track_summary(bounds)

    def network_track_summary(self, min_us: float | None, max_us: float | None) -> str:
        trace = latest_trace(self._history)
        bounds = resolve_bounds(trace, min_us, max_us)
        focus = self._engine.create_focus(trace.parsed_trace)
        return self._engine.create_formatter(focus).format_network_track_summary(bounds)

    def detailed_call_tree(self, key: str | EventKey) -> str:
        resolved = self._event(key)
        tree = self._engine.build_call_tree(resolved.event, resolved.trace.parsed_trace)
        if tree is None:
            return NO_CALL_TREE_PLACEHOLDER
        return self._engine.create_formatter(resolved.focus).format_call_tree(tree)
