"""Static catalog of the tools exposed over MCP."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import mcp.types as types

from proxmox_mcp.tools.arguments import (
    GuestArguments,
    NoArguments,
    NodeArguments,
    NodeFilterArguments,
    ToolArguments,
)


@dataclass(frozen=True)
class ToolDefinition:
    """A tool's public description and the model its arguments must match."""

    name: str
    description: str
    arguments: type[ToolArguments]
    properties: dict[str, Any] = field(default_factory=dict)
    required: tuple[str, ...] = ()

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON schema advertised to the caller."""
        schema: dict[str, Any] = {"type": "object", "properties": dict(self.properties)}
        if self.required:
            schema["required"] = list(self.required)
        return schema

    def to_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )


def _node(description: str) -> dict[str, Any]:
    return {"node": {"type": "string", "description": description}}


def _guest(label: str) -> dict[str, Any]:
    return {
        **_node(f"Node name where the {label} is located"),
        "vmid": {"type": ["integer", "string"], "description": f"{label} ID"},
    }


TOOL_DEFINITIONS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name="list_nodes",
        description="List all Proxmox nodes in the cluster",
        arguments=NoArguments,
    ),
    ToolDefinition(
        name="list_vms",
        description="List virtual machines on a specific node or all nodes",
        arguments=NodeFilterArguments,
        properties=_node("Node name (optional, lists VMs from all nodes if not specified)"),
    ),
    ToolDefinition(
        name="list_containers",
        description="List LXC containers on a specific node or all nodes",
        arguments=NodeFilterArguments,
        properties=_node(
            "Node name (optional, lists containers from all nodes if not specified)"
        ),
    ),
    ToolDefinition(
        name="get_vm_status",
        description="Get detailed status information for a specific VM",
        arguments=GuestArguments,
        properties=_guest("VM"),
        required=("node", "vmid"),
    ),
    ToolDefinition(
        name="start_vm",
        description="Start a virtual machine",
        arguments=GuestArguments,
        properties=_guest("VM"),
        required=("node", "vmid"),
    ),
    ToolDefinition(
        name="stop_vm",
        description="Stop a virtual machine",
        arguments=GuestArguments,
        properties=_guest("VM"),
        required=("node", "vmid"),
    ),
    ToolDefinition(
        name="get_container_status",
        description="Get detailed status information for a specific LXC container",
        arguments=GuestArguments,
        properties=_guest("Container"),
        required=("node", "vmid"),
    ),
    ToolDefinition(
        name="start_container",
        description="Start an LXC container",
        arguments=GuestArguments,
        properties=_guest("Container"),
        required=("node", "vmid"),
    ),
    ToolDefinition(
        name="stop_container",
        description="Stop an LXC container",
        arguments=GuestArguments,
        properties=_guest("Container"),
        required=("node", "vmid"),
    ),
    ToolDefinition(
        name="get_node_status",
        description="Get detailed status information for a Proxmox node",
        arguments=NodeArguments,
        properties=_node("Node name"),
        required=("node",),
    ),
    ToolDefinition(
        name="get_cluster_status",
        description="Get cluster membership and quorum status",
        arguments=NoArguments,
    ),
)

TOOLS_BY_NAME: MappingProxyType[str, ToolDefinition] = MappingProxyType(
    {definition.name: definition for definition in TOOL_DEFINITIONS}
)

TOOL_CATALOG: tuple[types.Tool, ...] = tuple(d.to_tool() for d in TOOL_DEFINITIONS)
