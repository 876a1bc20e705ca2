"""Data models for Proxmox VE resources."""

from proxmox_mcp.models.common import Guest, GuestKind, Node, TaskReference, to_jsonable

__all__ = [
    "Guest",
    "GuestKind",
    "Node",
    "TaskReference",
    "to_jsonable",
]
