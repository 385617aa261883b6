"""Data model for trace recording sessions.

- TraceSession: per-context recording state (IDLE / RECORDING) plus history
- RecordedTrace: immutable snapshot produced by a successful stop
- Bounds: resolved query window in microseconds
- EventKey: event reference scoped to exactly one recorded trace
- ParsedTraceResult / TraceParseFailure: what the engine returns from parse
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from perftrace.trace.history import TraceHistory


class SessionStatus(StrEnum):
    """Recording state of a TraceSession."""

    IDLE = "idle"
    RECORDING = "recording"


@dataclass(frozen=True, slots=True)
class Bounds:
    """Time window in microseconds. ``min <= max`` once resolved."""

    min: float
    max: float


@dataclass(frozen=True, slots=True)
class ParsedTraceResult:
    """Successful engine parse.

    ``parsed_trace`` is the engine's structured model; ``insights`` is the
    engine's insight set. Both are opaque to perftrace.
    """

    parsed_trace: Any
    insights: Any
    trace_min: float
    trace_max: float


@dataclass(frozen=True, slots=True)
class TraceParseFailure:
    """The engine rejected the raw trace payload."""

    error: str


ParseResult = ParsedTraceResult | TraceParseFailure


@dataclass(frozen=True, slots=True)
class RecordedTrace:
    """Immutable record of one successful recording.

    ``generation`` is the 1-based position in the owning TraceHistory.
    """

    generation: int
    parsed_trace: Any
    insights: Any
    trace_min: float
    trace_max: float
    page_url: str | None = None
    recorded_at: float = field(default_factory=time.time)

    @property
    def extent(self) -> Bounds:
        return Bounds(min=self.trace_min, max=self.trace_max)


@dataclass(frozen=True, slots=True)
class EventKey:
    """Event reference scoped to one trace generation.

    Agents only ever see ``local_key`` (e.g. ``"r-123"``); the generation is
    attached when the key is received so that a key minted for an older trace
    never resolves against a newer one.
    """

    generation: int
    local_key: str

    @classmethod
    def scoped_to(cls, trace: RecordedTrace, raw_key: str) -> EventKey:
        return cls(generation=trace.generation, local_key=raw_key)

    def __str__(self) -> str:
        return self.local_key


@dataclass
class TraceSession:
    """Recording state for one AppContext.

    Mutated only by TraceSessionController.start / stop.
    """

    history: TraceHistory
    status: SessionStatus = SessionStatus.IDLE
    target_page_url: str | None = None
    started_at: float | None = None

    @property
    def is_recording(self) -> bool:
        return self.status is SessionStatus.RECORDING

    def begin(self, page_url: str) -> None:
        """Commit to RECORDING. Must run before any await in start()."""
        self.status = SessionStatus.RECORDING
        self.target_page_url = page_url
        self.started_at = time.time()

    def reset(self) -> None:
        """Return to IDLE. History is untouched."""
        self.status = SessionStatus.IDLE
        self.started_at = None
