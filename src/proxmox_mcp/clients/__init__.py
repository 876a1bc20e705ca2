"""Proxmox VE API clients."""

from proxmox_mcp.clients.base import ProxmoxClient

__all__ = ["ProxmoxClient"]
