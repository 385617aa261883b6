"""Tests for config/models.py module.

Covers:
- LogOutputConfig model
- LoggingConfig model
- TracingConfig model
- BrowserConfig model
- PerfTraceConfig root model
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from perftrace.config.models import (
    BrowserConfig,
    LoggingConfig,
    LogOutputConfig,
    PerfTraceConfig,
    TracingConfig,
)


class TestLogOutputConfig:
    """Tests for LogOutputConfig model."""

    def test_defaults(self) -> None:
        config = LogOutputConfig()
        assert config.format == "console"
        assert config.destination == "stderr"
        assert config.level is None

    def test_relative_file_destination_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LogOutputConfig(destination="logs/perftrace.log")

    def test_home_relative_destination_expanded(self) -> None:
        config = LogOutputConfig(destination="~/perftrace.log")
        assert not config.destination.startswith("~")


class TestLoggingConfig:
    """Tests for LoggingConfig model."""

    def test_defaults(self) -> None:
        config = LoggingConfig()
        assert config.level == "INFO"
        assert len(config.outputs) == 1

    def test_invalid_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="TRACE")  # type: ignore[arg-type]


class TestTracingConfig:
    """Tests for TracingConfig model."""

    def test_defaults(self) -> None:
        config = TracingConfig()
        assert config.auto_stop_delay_sec == 5.0
        assert config.stop_timeout_sec is None
        assert config.blank_url == "about:blank"
        assert config.engine == ""

    def test_zero_delay_allowed(self) -> None:
        assert TracingConfig(auto_stop_delay_sec=0).auto_stop_delay_sec == 0

    def test_negative_delay_rejected(self) -> None:
        with pytest.raises(ValidationError, match="auto_stop_delay_sec"):
            TracingConfig(auto_stop_delay_sec=-1)

    @pytest.mark.parametrize("value", [0, -5])
    def test_non_positive_timeout_rejected(self, value: float) -> None:
        with pytest.raises(ValidationError, match="stop_timeout_sec"):
            TracingConfig(stop_timeout_sec=value)


class TestBrowserConfig:
    """Tests for BrowserConfig model."""

    def test_defaults(self) -> None:
        config = BrowserConfig()
        assert config.headless is True
        assert config.start_url == "about:blank"
        assert config.channel is None
        assert (config.viewport_width, config.viewport_height) == (1280, 720)

    def test_viewport_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            BrowserConfig(viewport_width=0)


class TestPerfTraceConfig:
    """Tests for PerfTraceConfig root model."""

    def test_sections_default(self) -> None:
        config = PerfTraceConfig()
        assert config.tracing == TracingConfig()
        assert config.browser == BrowserConfig()

    def test_from_nested_dict(self) -> None:
        config = PerfTraceConfig.model_validate(
            {"tracing": {"stop_timeout_sec": 12}, "browser": {"headless": False}}
        )
        assert config.tracing.stop_timeout_sec == 12
        assert config.browser.headless is False
