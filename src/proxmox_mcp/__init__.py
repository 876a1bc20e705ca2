"""MCP server for Proxmox VE cluster management."""

__version__ = "0.1.0"
