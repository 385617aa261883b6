"""perftrace error types with typed error codes.

Error code ranges:
- 1xxx: Session lifecycle
- 2xxx: Config
- 3xxx: Query
- 4xxx: Capture / parsing
- 9xxx: Internal

Every error is caught at the tool boundary and rendered as response lines;
``message`` is the exact text shown to the agent.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Session (1xxx)
    ALREADY_RUNNING = 1001

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_MISSING_REQUIRED = 2003
    CONFIG_ENGINE_NOT_FOUND = 2004

    # Query (3xxx)
    INVALID_BOUNDS = 3001
    NO_TRACE_RECORDED = 3002
    EVENT_NOT_FOUND = 3003
    INSIGHT_ERROR = 3004

    # Capture (4xxx)
    TRACE_PARSE_FAILURE = 4001
    DRIVER_FAILURE = 4002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001
    INTERNAL_TIMEOUT = 9002


@dataclass(frozen=True, slots=True)
class PerfTraceError(Exception):
    """Base error with structured context for MCP responses."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'INVALID_BOUNDS')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON/MCP responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class AlreadyRunningError(PerfTraceError):
    """A recording is already in progress on this session."""

    @classmethod
    def create(cls) -> "AlreadyRunningError":
        return cls(
            code=ErrorCode.ALREADY_RUNNING,
            message=(
                "Error: a performance trace is already running. "
                "Use performance_stop_trace to stop it. "
                "Only one trace can be running at any given time."
            ),
            retryable=True,
        )


class QueryError(PerfTraceError):
    """Errors raised while resolving a query against recorded traces."""


class InvalidBoundsError(QueryError):
    """Requested window is malformed or does not intersect the trace."""

    @classmethod
    def create(cls, min_us: float | None, max_us: float | None) -> "InvalidBoundsError":
        return cls(
            code=ErrorCode.INVALID_BOUNDS,
            message="Error: invalid trace bounds",
            retryable=True,
            details={"min": min_us, "max": max_us},
        )


class NoTraceRecordedError(QueryError):
    """No trace has been recorded yet."""

    @classmethod
    def create(cls, message: str = "Error: no trace recorded") -> "NoTraceRecordedError":
        return cls(code=ErrorCode.NO_TRACE_RECORDED, message=message, retryable=True)


class EventNotFoundError(QueryError):
    """Event key does not resolve within the latest trace."""

    @classmethod
    def create(cls, key: str, generation: int | None = None) -> "EventNotFoundError":
        return cls(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Error: no event with key found",
            retryable=True,
            details={"key": key, "generation": generation},
        )


class InsightError(QueryError):
    """The engine could not produce output for the requested insight."""

    @classmethod
    def create(cls, name: str, reason: str) -> "InsightError":
        return cls(
            code=ErrorCode.INSIGHT_ERROR,
            message=reason,
            retryable=True,
            details={"insight": name},
        )


class CaptureError(PerfTraceError):
    """Errors raised while capturing or parsing a trace."""


class TraceParseError(CaptureError):
    """The trace engine rejected the raw payload."""

    @classmethod
    def create(cls, reason: str) -> "TraceParseError":
        return cls(code=ErrorCode.TRACE_PARSE_FAILURE, message=reason, retryable=True)


class DriverError(CaptureError):
    """The page driver failed while capturing."""

    @classmethod
    def create(cls, reason: str, **details: Any) -> "DriverError":
        return cls(code=ErrorCode.DRIVER_FAILURE, message=reason, details=details)


class ConfigError(PerfTraceError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def missing_required(cls, field: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_MISSING_REQUIRED,
            message=f"Missing required config field: {field}",
            details={"field": field},
        )

    @classmethod
    def engine_not_found(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_ENGINE_NOT_FOUND,
            message=f"Cannot load trace engine '{path}': {reason}",
            details={"path": path, "reason": reason},
        )


class InternalError(PerfTraceError):
    """Internal/unexpected errors."""

    @classmethod
    def timeout(cls, operation: str, seconds: float) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_TIMEOUT,
            message=f"{operation} timed out after {seconds:g}s",
            details={"operation": operation, "timeout_sec": seconds},
        )
