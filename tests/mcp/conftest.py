"""Shared fixtures for MCP tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from perftrace.mcp.registry import ToolRegistry, registry


@pytest.fixture
def clean_registry() -> Generator[ToolRegistry, None, None]:
    """Clear and yield the global registry, restore after test."""
    # Store existing registrations
    original_tools = dict(registry._tools)
    registry.clear()
    yield registry
    # Restore
    registry._tools = original_tools
