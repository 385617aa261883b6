"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
These are protocol constraints and inputs the trace engine depends on.

For configurable values, see models.py (TracingConfig, BrowserConfig, etc.).
"""

# =============================================================================
# Trace Categories
# =============================================================================
# Keep in sync with the categories arrays in:
# https://source.chromium.org/chromium/chromium/src/+/main:third_party/devtools-frontend/src/front_end/panels/timeline/TimelineController.ts
# https://github.com/GoogleChrome/lighthouse/blob/master/lighthouse-core/gather/gatherers/trace.js
# The trace engine expects exactly this set; bump the version on any change.

TRACE_CATEGORIES_VERSION = 1
"""Revision of TRACE_CATEGORIES."""

TRACE_CATEGORIES: tuple[str, ...] = (
    "-*",
    "blink.console",
    "blink.user_timing",
    "devtools.timeline",
    "disabled-by-default-devtools.screenshot",
    "disabled-by-default-devtools.timeline",
    "disabled-by-default-devtools.timeline.invalidationTracking",
    "disabled-by-default-devtools.timeline.frame",
    "disabled-by-default-devtools.timeline.stack",
    "disabled-by-default-v8.cpu_profiler",
    "disabled-by-default-v8.cpu_profiler.hires",
    "latencyInfo",
    "loading",
    "disabled-by-default-lighthouse",
    "v8.execute",
    "v8",
)
"""Category allow-list passed to the driver when capture is enabled."""

# =============================================================================
# Recording
# =============================================================================

AUTO_STOP_DELAY_SEC = 5.0
"""Delay before an auto-stopping recording is stopped."""

BLANK_PAGE_URL = "about:blank"
"""Neutral page loaded before a reload recording starts capture."""

# =============================================================================
# Tool Surface
# =============================================================================

PERFORMANCE_CATEGORY = "performance"
"""Tool category tag for every trace tool."""

NO_CALL_TREE_PLACEHOLDER = "No call tree found"
"""Returned when an event has no traceable descendants."""
