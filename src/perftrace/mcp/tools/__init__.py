"""MCP tool handlers."""

from perftrace.mcp.tools import performance

__all__ = ["performance"]
