"""Core module exports."""

from perftrace.core.errors import (
    AlreadyRunningError,
    ConfigError,
    DriverError,
    ErrorCode,
    EventNotFoundError,
    InsightError,
    InternalError,
    InvalidBoundsError,
    NoTraceRecordedError,
    PerfTraceError,
    TraceParseError,
)
from perftrace.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "AlreadyRunningError",
    "ConfigError",
    "DriverError",
    "ErrorCode",
    "EventNotFoundError",
    "InsightError",
    "InternalError",
    "InvalidBoundsError",
    "NoTraceRecordedError",
    "PerfTraceError",
    "TraceParseError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
