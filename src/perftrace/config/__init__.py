"""Config module exports."""

from perftrace.config.loader import load_config, load_engine
from perftrace.config.models import (
    BrowserConfig,
    LoggingConfig,
    LogOutputConfig,
    PerfTraceConfig,
    TracingConfig,
)

__all__ = [
    "load_config",
    "load_engine",
    "BrowserConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "PerfTraceConfig",
    "TracingConfig",
]
