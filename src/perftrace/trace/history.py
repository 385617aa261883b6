"""Append-only history of recorded traces.

Insertion order is recording order. The active trace for every query is
``last()``. There is no removal API.
"""

from __future__ import annotations

from collections.abc import Iterator

from perftrace.trace.models import ParsedTraceResult, RecordedTrace


class TraceHistory:
    """Ordered sequence of RecordedTrace with O(1) access to the newest."""

    def __init__(self) -> None:
        self._traces: list[RecordedTrace] = []

    def append(self, result: ParsedTraceResult, page_url: str | None = None) -> RecordedTrace:
        """Record a parsed trace and return the new RecordedTrace.

        The record is fully built before it becomes visible to readers.
        """
        trace = RecordedTrace(
            generation=len(self._traces) + 1,
            parsed_trace=result.parsed_trace,
            insights=result.insights,
            trace_min=result.trace_min,
            trace_max=result.trace_max,
            page_url=page_url,
        )
        self._traces.append(trace)
        return trace

    def last(self) -> RecordedTrace | None:
        """The most recently recorded trace, or None if nothing was recorded."""
        return self._traces[-1] if self._traces else None

    def __len__(self) -> int:
        return len(self._traces)

    def __iter__(self) -> Iterator[RecordedTrace]:
        return iter(tuple(self._traces))

    def __bool__(self) -> bool:
        return bool(self._traces)
