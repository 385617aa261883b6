"""Event resolution against the most recently recorded trace."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from perftrace.core.errors import EventNotFoundError, NoTraceRecordedError
from perftrace.trace.models import EventKey, RecordedTrace

if TYPE_CHECKING:
    from perftrace.trace.history import TraceHistory
    from perftrace.trace.protocols import AnalysisFocus


@dataclass(frozen=True, slots=True)
class ResolvedEvent:
    """An event found in a specific trace, with the focus used to find it."""

    key: EventKey
    event: Any
    trace: RecordedTrace
    focus: AnalysisFocus


def latest_trace(history: TraceHistory) -> RecordedTrace:
    """Return ``history.last()`` or raise NoTraceRecordedError."""
    trace = history.last()
    if trace is None:
        raise NoTraceRecordedError.create()
    return trace


def resolve_event(trace: RecordedTrace, key: EventKey, focus: AnalysisFocus) -> ResolvedEvent:
    """Look ``key`` up in ``trace`` only.

    There is no fallback to older traces: a key scoped to a different
    generation is reported as not found even if its local part happens to
    exist in ``trace``.

    Tool calls pass bare string keys, which ``ReportDispatcher`` scopes to
    the latest trace on receipt, so they always match. The generation check
    applies to callers that kept an ``EventKey`` (e.g. from
    ``EventKey.scoped_to``) across a new recording.

    Raises:
        EventNotFoundError: The key is from another generation or unknown.
    """
    if key.generation != trace.generation:
        raise EventNotFoundError.create(key.local_key, key.generation)

    event = focus.lookup_event(key.local_key)
    if event is None:
        raise EventNotFoundError.create(key.local_key, key.generation)
    return ResolvedEvent(key=key, event=event, trace=trace, focus=focus)
