"""Routes MCP tool calls to the Proxmox client."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from functools import partial
from typing import TYPE_CHECKING, Any

import mcp.types as types
from mcp.shared.exceptions import McpError

from proxmox_mcp.models.common import GuestKind, to_jsonable
from proxmox_mcp.tools.arguments import (
    GuestArguments,
    NodeArguments,
    NodeFilterArguments,
    ToolArguments,
    parse_arguments,
)
from proxmox_mcp.tools.catalog import TOOL_CATALOG, TOOLS_BY_NAME

if TYPE_CHECKING:
    from proxmox_mcp.clients.base import ProxmoxClient

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[str]]


def _to_json(value: Any) -> str:
    return json.dumps(value, indent=2)


class ToolGateway:
    """Exposes the tool catalog and dispatches calls.

    Every failure inside a call is reported as an INTERNAL_ERROR McpError
    naming the tool; only unknown tool names get METHOD_NOT_FOUND.
    """

    def __init__(self, client: ProxmoxClient) -> None:
        self._client = client
        self._handlers: dict[str, Handler] = {
            "list_nodes": self._list_nodes,
            "list_vms": partial(self._list_guests, GuestKind.QEMU),
            "list_containers": partial(self._list_guests, GuestKind.LXC),
            "get_vm_status": partial(self._get_guest_status, GuestKind.QEMU),
            "start_vm": partial(self._change_state, GuestKind.QEMU, "start"),
            "stop_vm": partial(self._change_state, GuestKind.QEMU, "stop"),
            "get_container_status": partial(self._get_guest_status, GuestKind.LXC),
            "start_container": partial(self._change_state, GuestKind.LXC, "start"),
            "stop_container": partial(self._change_state, GuestKind.LXC, "stop"),
            "get_node_status": self._get_node_status,
            "get_cluster_status": self._get_cluster_status,
        }

    def list_tools(self) -> list[types.Tool]:
        """Return the tool catalog."""
        return [tool.model_copy(deep=True) for tool in TOOL_CATALOG]

    async def call_tool(
        self, name: str, arguments: dict[str, Any] | None
    ) -> list[types.TextContent]:
        """Run a tool and return its result as text content.

        Raises:
            McpError: METHOD_NOT_FOUND for unknown tools, INTERNAL_ERROR for
                invalid arguments and client failures.
        """
        definition = TOOLS_BY_NAME.get(name)
        if definition is None:
            raise McpError(
                types.ErrorData(code=types.METHOD_NOT_FOUND, message=f"Unknown tool: {name}")
            )

        try:
            args = parse_arguments(definition.arguments, name, arguments)
            text = await self._handlers[name](args)
        except Exception as e:
            logger.error(f"Error executing tool {name}: {e}")
            raise McpError(
                types.ErrorData(
                    code=types.INTERNAL_ERROR,
                    message=f"Error executing tool {name}: {e}",
                )
            ) from e

        return [types.TextContent(type="text", text=text)]

    async def _list_nodes(self, _args: ToolArguments) -> str:
        nodes = await self._client.list_nodes()
        return _to_json(to_jsonable(nodes))

    async def _list_guests(self, kind: GuestKind, args: NodeFilterArguments) -> str:
        guests = await self._client.list_guests(kind, args.node)
        return _to_json(to_jsonable(guests))

    async def _get_guest_status(self, kind: GuestKind, args: GuestArguments) -> str:
        status = await self._client.get_guest_status(args.node, args.vmid, kind)
        return _to_json(status)

    async def _change_state(self, kind: GuestKind, action: str, args: GuestArguments) -> str:
        if action == "start":
            task = await self._client.start_guest(args.node, args.vmid, kind)
        else:
            task = await self._client.stop_guest(args.node, args.vmid, kind)
        label = "VM" if kind is GuestKind.QEMU else "Container"
        return f"{label} {args.vmid} {action} command sent. Task ID: {task.upid}"

    async def _get_node_status(self, args: NodeArguments) -> str:
        return _to_json(await self._client.get_node_status(args.node))

    async def _get_cluster_status(self, _args: ToolArguments) -> str:
        return _to_json(await self._client.get_cluster_status())
