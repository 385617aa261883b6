"""MCP server module - FastMCP tool registration and wiring."""

from perftrace.mcp.context import AppContext
from perftrace.mcp.registry import ToolRegistry, ToolSpec
from perftrace.mcp.server import create_mcp_server

__all__ = ["AppContext", "ToolRegistry", "ToolSpec", "create_mcp_server"]
