"""
MCP (Model Context Protocol) surface of multiruntime.
"""

from .mcp_runner import MCPRunner, RuntimesConfig

__all__ = ["MCPRunner", "RuntimesConfig"]
