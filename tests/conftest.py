"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages, and
provides in-memory stand-ins for the page driver and trace engine.
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from perftrace.config.models import PerfTraceConfig, TracingConfig  # noqa: E402
from perftrace.mcp.context import AppContext  # noqa: E402
from perftrace.trace.controller import TraceSessionController  # noqa: E402
from perftrace.trace.history import TraceHistory  # noqa: E402
from perftrace.trace.models import (  # noqa: E402
    Bounds,
    ParsedTraceResult,
    ParseResult,
    RecordedTrace,
    TraceSession,
)
from perftrace.trace.protocols import InsightOutput  # noqa: E402

DEFAULT_EVENTS: dict[str, Any] = {
    "r-1": {"name": "RunTask", "ts": 1500, "dur": 200, "children": ["r-2"]},
    "r-2": {"name": "FunctionCall", "ts": 1550, "dur": 50},
}


def make_parsed(
    events: dict[str, Any] | None = None,
    trace_min: float = 1000,
    trace_max: float = 5000,
    insights: dict[str, str] | None = None,
) -> ParsedTraceResult:
    """Build a successful parse result over a dict of events."""
    return ParsedTraceResult(
        parsed_trace={"events": dict(DEFAULT_EVENTS if events is None else events)},
        insights=insights if insights is not None else {"LCPBreakdown": "LCP was 1.2s"},
        trace_min=trace_min,
        trace_max=trace_max,
    )


class FakeFocus:
    def __init__(self, events: dict[str, Any]) -> None:
        self.events = events

    def lookup_event(self, key: str) -> Any | None:
        return self.events.get(key)


class FakeFormatter:
    def __init__(self, focus: FakeFocus) -> None:
        self.focus = focus

    def format_main_thread_track_summary(self, bounds: Bounds) -> str:
        return f"main thread {bounds.min:g}-{bounds.max:g}"

    def format_network_track_summary(self, bounds: Bounds) -> str:
        return f"network {bounds.min:g}-{bounds.max:g}"

    def format_call_tree(self, tree: Any) -> str:
        return f"call tree: {tree}"


class FakeEngine:
    """TraceEngine over dict-shaped parsed traces.

    Queue results with ``results``; when empty, ``parse`` returns
    ``make_parsed()``.
    """

    def __init__(self) -> None:
        self.results: list[ParseResult | Exception] = []
        self.payloads: list[bytes] = []

    async def parse(self, raw: bytes) -> ParseResult:
        self.payloads.append(raw)
        if not self.results:
            return make_parsed()
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    def summarize(self, parsed_trace: Any, insights: Any) -> str:
        return f"{len(parsed_trace['events'])} events, insights: {', '.join(insights)}"

    def insight_output(self, parsed_trace: Any, insights: Any, name: str) -> InsightOutput:  # noqa: ARG002
        if name not in insights:
            return InsightOutput(error=f"No Insight with the name {name} found.")
        return InsightOutput(output=insights[name])

    def create_focus(self, parsed_trace: Any) -> FakeFocus:
        return FakeFocus(parsed_trace["events"])

    def create_formatter(self, focus: FakeFocus) -> FakeFormatter:
        return FakeFormatter(focus)

    def build_call_tree(self, event: Any, parsed_trace: Any) -> Any | None:  # noqa: ARG002
        children = event.get("children")
        if not children:
            return None
        return f"{event['name']} -> {', '.join(children)}"


class FakeDriver:
    """PageDriver recording every call.

    Set ``failures[method]`` to make that method raise; set ``gate`` to make
    ``goto`` and ``stop_tracing`` wait until it is set.
    """

    def __init__(self, url: str = "https://example.com/") -> None:
        self.current_url = url
        self.calls: list[tuple[Any, ...]] = []
        self.tracing = False
        self.payload = b'{"traceEvents": []}'
        self.failures: dict[str, Exception] = {}
        self.gate: asyncio.Event | None = None

    def _maybe_fail(self, method: str) -> None:
        if method in self.failures:
            raise self.failures[method]

    def url(self) -> str:
        return self.current_url

    async def goto(self, url: str, *, wait_until: str) -> None:
        self.calls.append(("goto", url, wait_until))
        if self.gate is not None:
            await self.gate.wait()
        self._maybe_fail("goto")
        self.current_url = url

    async def start_tracing(self, categories: Sequence[str]) -> None:
        self.calls.append(("start_tracing", tuple(categories)))
        self._maybe_fail("start_tracing")
        self.tracing = True

    async def stop_tracing(self) -> bytes:
        self.calls.append(("stop_tracing",))
        if self.gate is not None:
            await self.gate.wait()
        self._maybe_fail("stop_tracing")
        self.tracing = False
        return self.payload


@pytest.fixture
def fake_driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def tracing_config() -> TracingConfig:
    """Tracing config with no auto-stop delay."""
    return TracingConfig(auto_stop_delay_sec=0)


@pytest.fixture
def session() -> TraceSession:
    return TraceSession(history=TraceHistory())


@pytest.fixture
def record(session: TraceSession) -> Callable[..., RecordedTrace]:
    """Append a parsed trace (see make_parsed) to the session history."""

    def _record(**kwargs: Any) -> RecordedTrace:
        return session.history.append(make_parsed(**kwargs))

    return _record


@pytest.fixture
def controller(
    session: TraceSession,
    fake_driver: FakeDriver,
    fake_engine: FakeEngine,
    tracing_config: TracingConfig,
) -> TraceSessionController:
    return TraceSessionController(session, fake_driver, fake_engine, tracing_config)


@pytest.fixture
def app_context(
    fake_driver: FakeDriver,
    fake_engine: FakeEngine,
    tracing_config: TracingConfig,
) -> AppContext:
    return AppContext.create(fake_driver, fake_engine, PerfTraceConfig(tracing=tracing_config))
