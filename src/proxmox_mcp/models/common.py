"""Pydantic models for Proxmox VE resources."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GuestKind(str, Enum):
    """Guest types, named after their API sub-resource."""

    QEMU = "qemu"
    LXC = "lxc"

    @property
    def label(self) -> str:
        """Human-readable name used in messages."""
        return "VM" if self is GuestKind.QEMU else "container"


class Node(BaseModel):
    """Cluster node as returned by GET /nodes.

    Offline nodes report no usage metrics, so every metric is optional.
    Fields not modelled here are kept as extras.
    """

    model_config = ConfigDict(extra="allow")

    node: str = Field(..., description="Node name")
    status: str = Field("unknown", description="online, offline or unknown")
    cpu: float | None = Field(None, description="CPU utilization (0..1)")
    maxcpu: int | None = Field(None, description="Number of CPUs")
    mem: int | None = Field(None, description="Used memory in bytes")
    maxmem: int | None = Field(None, description="Total memory in bytes")
    disk: int | None = Field(None, description="Used root disk space in bytes")
    maxdisk: int | None = Field(None, description="Root disk size in bytes")
    uptime: int | None = Field(None, description="Uptime in seconds")


class Guest(BaseModel):
    """Virtual machine or container on a node.

    Both guest kinds share this shape.
    """

    model_config = ConfigDict(extra="allow")

    vmid: int = Field(..., description="Guest id")
    name: str | None = Field(None, description="Guest name")
    status: str = Field("unknown", description="running, stopped, ...")
    node: str | None = Field(None, description="Owning node")
    cpu: float | None = Field(None, description="CPU utilization (0..1)")
    cpus: float | None = Field(None, description="Allocated CPUs")
    mem: int | None = Field(None, description="Used memory in bytes")
    maxmem: int | None = Field(None, description="Memory limit in bytes")
    disk: int | None = Field(None, description="Used disk space in bytes")
    maxdisk: int | None = Field(None, description="Disk size in bytes")
    uptime: int | None = Field(None, description="Uptime in seconds")

    @classmethod
    def from_api(cls, data: dict[str, Any], node: str) -> "Guest":
        """Create from a guest list entry, tagging it with its node."""
        return cls.model_validate({**data, "node": node})


class TaskReference(BaseModel):
    """Handle for an asynchronous task queued on the cluster."""

    upid: str = Field(..., description="Proxmox task id (UPID)")

    def __str__(self) -> str:
        return self.upid


def to_jsonable(items: list[BaseModel]) -> list[dict[str, Any]]:
    """Dump models for JSON output, dropping unset metrics."""
    return [item.model_dump(mode="json", exclude_none=True) for item in items]
