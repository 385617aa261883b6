"""Application context for MCP handlers.

Single object passed to all tool handlers. Owns the TraceSession; its
lifetime is the server's lifetime.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from perftrace.config.models import PerfTraceConfig

if TYPE_CHECKING:
    from perftrace.trace.controller import TraceSessionController
    from perftrace.trace.models import TraceSession
    from perftrace.trace.protocols import PageDriver, TraceEngine
    from perftrace.trace.reports import ReportDispatcher


@dataclass
class AppContext:
    """Context object passed to all MCP tool handlers."""

    config: PerfTraceConfig
    driver: PageDriver
    engine: TraceEngine
    session: TraceSession
    controller: TraceSessionController
    reports: ReportDispatcher

    @classmethod
    def create(
        cls,
        driver: PageDriver,
        engine: TraceEngine,
        config: PerfTraceConfig | None = None,
    ) -> AppContext:
        """Factory to create context with session, controller and reports wired together.

        Args:
            driver: Page driver for the page being traced
            engine: Trace engine used to parse and analyze recordings
            config: Resolved configuration (defaults if None)
        """
        from perftrace.trace.controller import TraceSessionController
        from perftrace.trace.history import TraceHistory
        from perftrace.trace.models import TraceSession
        from perftrace.trace.reports import ReportDispatcher

        config = config or PerfTraceConfig()
        session = TraceSession(history=TraceHistory())
        controller = TraceSessionController(session, driver, engine, config.tracing)
        reports = ReportDispatcher(engine, session.history)

        return cls(
            config=config,
            driver=driver,
            engine=engine,
            session=session,
            controller=controller,
            reports=reports,
        )
