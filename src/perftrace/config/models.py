"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (PERFTRACE__SECTION__KEY)
3. Project YAML (.perftrace/config.yaml)
4. Global YAML (~/.config/perftrace/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    PERFTRACE__<SECTION>__<KEY>=<VALUE>

Examples:
    PERFTRACE__LOGGING__LEVEL=DEBUG
    PERFTRACE__TRACING__STOP_TIMEOUT_SEC=30
    PERFTRACE__BROWSER__HEADLESS=false
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from perftrace.config.constants import AUTO_STOP_DELAY_SEC, BLANK_PAGE_URL

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        PERFTRACE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG is verbose and may impact performance.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class TracingConfig(BaseModel):
    """Trace recording configuration.

    Env vars:
        PERFTRACE__TRACING__AUTO_STOP_DELAY_SEC: Recording length when autoStop is set
        PERFTRACE__TRACING__STOP_TIMEOUT_SEC: Upper bound on stopping and parsing
        PERFTRACE__TRACING__ENGINE: Import path of the trace engine factory
    """

    auto_stop_delay_sec: float = Field(
        default=AUTO_STOP_DELAY_SEC,
        description="Seconds to record before an autoStop recording is stopped.",
    )
    stop_timeout_sec: float | None = Field(
        default=None,
        description="Timeout for retrieving and parsing the trace. None waits forever. "
        "A driver that never answers blocks the stop call without it.",
    )
    blank_url: str = Field(
        default=BLANK_PAGE_URL,
        description="Page loaded before capture starts on reload recordings.",
    )
    engine: str = Field(
        default="",
        description="Trace engine factory as 'package.module:callable'.",
    )

    @field_validator("auto_stop_delay_sec")
    @classmethod
    def validate_delay(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"auto_stop_delay_sec must be >= 0, got {v}")
        return v

    @field_validator("stop_timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError(f"stop_timeout_sec must be > 0, got {v}")
        return v


class BrowserConfig(BaseModel):
    """Browser launch configuration for the Playwright driver.

    Env vars:
        PERFTRACE__BROWSER__HEADLESS: Run Chromium without a window
        PERFTRACE__BROWSER__START_URL: Page opened at startup
        PERFTRACE__BROWSER__CHANNEL: Chromium channel (e.g. "chrome")
    """

    headless: bool = True
    start_url: str = BLANK_PAGE_URL
    channel: str | None = None
    viewport_width: int = Field(default=1280, ge=1)
    viewport_height: int = Field(default=720, ge=1)


class PerfTraceConfig(BaseModel):
    """Root configuration model."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    tracing: TracingConfig = Field(default_factory=TracingConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
