"""MCP tool catalog and dispatch."""

from proxmox_mcp.tools.catalog import TOOL_CATALOG, TOOL_DEFINITIONS, ToolDefinition
from proxmox_mcp.tools.gateway import ToolGateway

__all__ = [
    "TOOL_CATALOG",
    "TOOL_DEFINITIONS",
    "ToolDefinition",
    "ToolGateway",
]
