"""Tests for trace/reports.py - ReportDispatcher."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import pytest
from pydantic import BaseModel

from perftrace.config.constants import NO_CALL_TREE_PLACEHOLDER
from perftrace.core.errors import (
    EventNotFoundError,
    InsightError,
    InvalidBoundsError,
    NoTraceRecordedError,
)
from perftrace.trace.models import EventKey, TraceSession
from perftrace.trace.reports import (
    NO_INSIGHT_TRACE_MESSAGE,
    ReportDispatcher,
    serialize_event,
)


@pytest.fixture
def reports(fake_engine: Any, session: TraceSession) -> ReportDispatcher:
    return ReportDispatcher(fake_engine, session.history)


class TestNoTraceRecorded:
    """Every query fails cleanly before the first recording."""

    def test_insight(self, reports: ReportDispatcher) -> None:
        with pytest.raises(NoTraceRecordedError) as exc_info:
            reports.insight("LCPBreakdown")
        assert exc_info.value.message == NO_INSIGHT_TRACE_MESSAGE

    @pytest.mark.parametrize(
        ("method", "args"),
        [
            ("event_detail", ("r-1",)),
            ("main_thread_track_summary", (0, 10)),
            ("network_track_summary", (0, 10)),
            ("detailed_call_tree", ("r-1",)),
        ],
    )
    def test_queries(self, reports: ReportDispatcher, method: str, args: tuple[Any, ...]) -> None:
        with pytest.raises(NoTraceRecordedError) as exc_info:
            getattr(reports, method)(*args)
        assert exc_info.value.message == "Error: no trace recorded"


class TestTrackSummaries:
    """Tests for bounds-based summaries."""

    def test_main_thread_uses_clamped_bounds(
        self, reports: ReportDispatcher, record: Any
    ) -> None:
        record(trace_min=1000, trace_max=5000)
        assert reports.main_thread_track_summary(0, 10000) == "main thread 1000-5000"

    def test_network_uses_clamped_bounds(
        self, reports: ReportDispatcher, record: Any
    ) -> None:
        record(trace_min=1000, trace_max=5000)
        assert reports.network_track_summary(2000, 9000) == "network 2000-5000"

    def test_invalid_bounds(self, reports: ReportDispatcher, record: Any) -> None:
        record(trace_min=1000, trace_max=5000)
        with pytest.raises(InvalidBoundsError):
            reports.main_thread_track_summary(6000, 7000)
        with pytest.raises(InvalidBoundsError):
            reports.network_track_summary(3000, 2000)

    def test_summaries_use_latest_trace(
        self, reports: ReportDispatcher, record: Any
    ) -> None:
        record(trace_min=0, trace_max=100)
        record(trace_min=500, trace_max=900)
        assert reports.main_thread_track_summary(0, 1000) == "main thread 500-900"


class TestEventQueries:
    """Tests for event_detail and detailed_call_tree."""

    def test_event_detail_serializes_event(
        self, reports: ReportDispatcher, record: Any
    ) -> None:
        record()
        text = reports.event_detail("r-2")

        assert text.startswith("Event:\n")
        assert json.loads(text.removeprefix("Event:\n")) == {
            "name": "FunctionCall",
            "ts": 1550,
            "dur": 50,
        }

    def test_event_detail_unknown_key(
        self, reports: ReportDispatcher, record: Any
    ) -> None:
        record()
        with pytest.raises(EventNotFoundError):
            reports.event_detail("r-999")

    def test_key_from_superseded_trace_not_found(
        self, reports: ReportDispatcher, record: Any
    ) -> None:
        """A key valid in trace #1 is not found once trace #2 exists."""
        record(events={"r-1": {"name": "RunTask"}})
        assert reports.event_detail("r-1").startswith("Event:")

        record(events={"r-7": {"name": "Layout"}})
        with pytest.raises(EventNotFoundError):
            reports.event_detail("r-1")

    def test_generation_scoped_key_rejected_after_new_trace(
        self, reports: ReportDispatcher, record: Any
    ) -> None:
        first = record()
        key = EventKey.scoped_to(first, "r-1")
        record()

        with pytest.raises(EventNotFoundError):
            reports.detailed_call_tree(key)

    def test_string_key_scoped_to_latest_trace(
        self, reports: ReportDispatcher, record: Any
    ) -> None:
        """A bare key from a tool call resolves against the newest recording."""
        record()
        record(events={"r-1": {"name": "Layout", "ts": 2000, "dur": 10}})

        assert '"name": "Layout"' in reports.event_detail("r-1")

    def test_call_tree(self, reports: ReportDispatcher, record: Any) -> None:
        record()
        assert reports.detailed_call_tree("r-1") == "call tree: RunTask -> r-2"

    def test_call_tree_placeholder_when_no_tree(
        self, reports: ReportDispatcher, record: Any
    ) -> None:
        """An event without descendants yields the placeholder, not an error."""
        record()
        assert reports.detailed_call_tree("r-2") == NO_CALL_TREE_PLACEHOLDER

    def test_call_tree_unknown_key(self, reports: ReportDispatcher, record: Any) -> None:
        record()
        with pytest.raises(EventNotFoundError):
            reports.detailed_call_tree("r-404")


class TestInsight:
    """Tests for insight."""

    def test_insight_output(self, reports: ReportDispatcher, record: Any) -> None:
        record()
        assert reports.insight("LCPBreakdown") == "LCP was 1.2s"

    def test_insight_error_text(self, reports: ReportDispatcher, record: Any) -> None:
        record()
        with pytest.raises(InsightError) as exc_info:
            reports.insight("DocumentLatency")
        assert exc_info.value.message == "No Insight with the name DocumentLatency found."
        assert exc_info.value.details == {"insight": "DocumentLatency"}


class TestSerializeEvent:
    """Tests for serialize_event."""

    def test_dataclass_event(self) -> None:
        @dataclass
        class Event:
            name: str
            ts: int

        assert json.loads(serialize_event(Event("Paint", 10))) == {"name": "Paint", "ts": 10}

    def test_pydantic_event(self) -> None:
        class Event(BaseModel):
            name: str

        assert json.loads(serialize_event({"event": Event(name="Layout")})) == {
            "event": {"name": "Layout"}
        }

    def test_indentation(self) -> None:
        assert serialize_event({"a": 1}) == '{\n  "a": 1\n}'
