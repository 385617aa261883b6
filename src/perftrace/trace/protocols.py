"""Interfaces of the external collaborators.

perftrace orchestrates these but never implements trace parsing, insight
derivation, or prose generation itself.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal, Protocol, runtime_checkable

from perftrace.trace.models import Bounds, ParseResult

WaitUntil = Literal["load", "domcontentloaded", "networkidle"]


@runtime_checkable
class PageDriver(Protocol):
    """Browser-automation driver bound to one page."""

    def url(self) -> str:
        """Current URL of the page."""
        ...

    async def goto(self, url: str, *, wait_until: WaitUntil) -> None: ...

    async def start_tracing(self, categories: Sequence[str]) -> None: ...

    async def stop_tracing(self) -> bytes:
        """Disable capture and return the raw trace payload."""
        ...


@dataclass(frozen=True, slots=True)
class InsightOutput:
    """Engine answer for one insight: exactly one of output/error is set."""

    output: str | None = None
    error: str | None = None


class AnalysisFocus(Protocol):
    """Analysis scope over one parsed trace."""

    def lookup_event(self, key: str) -> Any | None: ...


class TraceFormatter(Protocol):
    """Renders focus-scoped data into prose."""

    def format_main_thread_track_summary(self, bounds: Bounds) -> str: ...

    def format_network_track_summary(self, bounds: Bounds) -> str: ...

    def format_call_tree(self, tree: Any) -> str: ...


@runtime_checkable
class TraceEngine(Protocol):
    """Parses raw traces and builds the analysis objects queries need."""

    async def parse(self, raw: bytes) -> ParseResult: ...

    def summarize(self, parsed_trace: Any, insights: Any) -> str:
        """High-level metrics and insight overview for a fresh recording."""
        ...

    def insight_output(self, parsed_trace: Any, insights: Any, name: str) -> InsightOutput: ...

    def create_focus(self, parsed_trace: Any) -> AnalysisFocus: ...

    def create_formatter(self, focus: AnalysisFocus) -> TraceFormatter: ...

    def build_call_tree(self, event: Any, parsed_trace: Any) -> Any | None:
        """Call tree rooted at ``event``, or None if it has no traceable descendants."""
        ...
