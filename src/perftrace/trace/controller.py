"""Trace session controller: start/stop lifecycle of a single recording.

State machine: IDLE -> RECORDING -> IDLE, cycling indefinitely. At most one
recording runs per TraceSession. ``start`` commits to RECORDING before its
first await, so a concurrent second ``start`` is rejected. ``stop`` returns
to IDLE on every exit path.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog

from perftrace.config.constants import TRACE_CATEGORIES
from perftrace.config.models import TracingConfig
from perftrace.core.errors import (
    AlreadyRunningError,
    DriverError,
    InternalError,
    PerfTraceError,
    TraceParseError,
)
from perftrace.trace.models import RecordedTrace, TraceParseFailure

if TYPE_CHECKING:
    from perftrace.trace.models import ParseResult, TraceSession
    from perftrace.trace.protocols import PageDriver, TraceEngine

log = structlog.get_logger(__name__)

RECORDING_MESSAGE = (
    "The performance trace is being recorded. Use performance_stop_trace to stop it."
)
STOPPED_MESSAGE = "The performance trace has been stopped."
SUMMARY_HEADER = "Here is a high level summary of the trace and the Insights that were found:"
PARSE_FAILURE_HEADER = "There was an unexpected error parsing the trace:"
STOP_FAILURE_HEADER = "An error occurred generating the response for this trace:"


def _error_text(exc: BaseException) -> str:
    if isinstance(exc, PerfTraceError):
        return exc.message
    return str(exc) or type(exc).__name__


class TraceSessionController:
    """Owns the recording lifecycle for one TraceSession."""

    def __init__(
        self,
        session: TraceSession,
        driver: PageDriver,
        engine: TraceEngine,
        config: TracingConfig | None = None,
    ) -> None:
        self._session = session
        self._driver = driver
        self._engine = engine
        self._config = config or TracingConfig()

    @property
    def session(self) -> TraceSession:
        return self._session

    async def start(self, *, reload: bool, auto_stop: bool) -> list[str]:
        """Begin recording on the driver's page.

        Args:
            reload: Load a blank page before capture, then navigate back to
                the original URL once capture is running.
            auto_stop: Record for ``auto_stop_delay_sec`` then stop and
                return the stop output.

        Raises:
            AlreadyRunningError: A recording is in progress. Nothing changes.
            DriverError: Capture could not be enabled. The session is IDLE.
        """
        if self._session.is_recording:
            raise AlreadyRunningError.create()
        page_url = self._driver.url()
        self._session.begin(page_url)

        try:
            if reload:
                await self._driver.goto(self._config.blank_url, wait_until="networkidle")
            await self._driver.start_tracing(TRACE_CATEGORIES)
        except asyncio.CancelledError:
            self._session.reset()
            raise
        except Exception as e:
            self._session.reset()
            log.error("trace_start_failed", page_url=page_url, error=_error_text(e))
            log.debug("trace_start_failed_traceback", exc_info=True)
            raise DriverError.create(
                f"Failed to start the performance trace: {_error_text(e)}",
                page_url=page_url,
            ) from e

        log.debug("trace_recording_started", page_url=page_url, reload=reload)

        if reload:
            try:
                await self._driver.goto(page_url, wait_until="load")
            except Exception as e:
                log.error("trace_reload_failed", page_url=page_url, error=_error_text(e))
                raise DriverError.create(
                    f"Failed to reload {page_url}: {_error_text(e)}. "
                    "The trace is still recording; use performance_stop_trace to stop it.",
                    page_url=page_url,
                ) from e

        if auto_stop:
            await asyncio.sleep(self._config.auto_stop_delay_sec)
            return await self.stop()
        return [RECORDING_MESSAGE]

    async def stop(self) -> list[str]:
        """Stop recording, parse the trace and record it in history.

        A no-op returning no lines when the session is IDLE. Never raises for
        driver or engine failures; they are reported as lines.
        """
        if not self._session.is_recording:
            return []

        lines: list[str] = []
        async with self._recording():
            try:
                trace = await self._collect()
                lines.append(STOPPED_MESSAGE)
                lines.append(SUMMARY_HEADER)
                lines.append(self._engine.summarize(trace.parsed_trace, trace.insights))
            except TraceParseError as e:
                lines.extend([STOPPED_MESSAGE, PARSE_FAILURE_HEADER, e.message])
            except Exception as e:
                error_text = _error_text(e)
                log.error("trace_stop_failed", error=error_text)
                log.debug("trace_stop_failed_traceback", exc_info=True)
                lines.extend([STOP_FAILURE_HEADER, error_text])
        return lines

    @asynccontextmanager
    async def _recording(self) -> AsyncIterator[None]:
        """Scope around disabling capture; the session is IDLE on exit."""
        try:
            yield
        finally:
            self._session.reset()

    async def _collect(self) -> RecordedTrace:
        """Disable capture, parse the payload, and append it to history.

        Raises:
            TraceParseError: The engine rejected the payload.
            InternalError: ``stop_timeout_sec`` elapsed.
        """
        timeout = self._config.stop_timeout_sec
        try:
            result = await asyncio.wait_for(self._stop_and_parse(), timeout=timeout)
        except TimeoutError as e:
            raise InternalError.timeout("Stopping the performance trace", timeout or 0) from e

        if isinstance(result, TraceParseFailure):
            raise TraceParseError.create(result.error)

        trace = self._session.history.append(result, page_url=self._session.target_page_url)
        started_at = self._session.started_at or trace.recorded_at
        log.debug(
            "trace_recorded",
            generation=trace.generation,
            trace_min=trace.trace_min,
            trace_max=trace.trace_max,
            duration_sec=round(trace.recorded_at - started_at, 3),
        )
        return trace

    async def _stop_and_parse(self) -> ParseResult:
        raw = await self._driver.stop_tracing()
        return await self._engine.parse(raw)
