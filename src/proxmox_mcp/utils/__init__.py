"""Utility helpers for the Proxmox MCP server."""

from proxmox_mcp.utils.errors import (
    AuthenticationError,
    ConfigurationError,
    ProxmoxMCPError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    "ProxmoxMCPError",
    "AuthenticationError",
    "ConfigurationError",
    "UpstreamError",
    "ValidationError",
]
