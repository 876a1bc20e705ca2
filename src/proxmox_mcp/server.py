"""MCP server definition for Proxmox VE."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from proxmox_mcp import __version__
from proxmox_mcp.clients.base import ProxmoxClient
from proxmox_mcp.config import ProxmoxConfig
from proxmox_mcp.tools.gateway import ToolGateway

logger = logging.getLogger(__name__)

SERVER_NAME = "proxmox-mcp"


class ProxmoxMCPServer:
    """Proxmox MCP server serving the tool gateway over stdio."""

    def __init__(self, config: ProxmoxConfig, client: ProxmoxClient | None = None) -> None:
        self._config = config
        self._client = client or ProxmoxClient(config)
        self._gateway = ToolGateway(self._client)
        self._mcp = self._create_mcp()

    @property
    def config(self) -> ProxmoxConfig:
        """Get server configuration."""
        return self._config

    @property
    def client(self) -> ProxmoxClient:
        """Get the Proxmox API client."""
        return self._client

    @property
    def gateway(self) -> ToolGateway:
        """Get the tool gateway."""
        return self._gateway

    @property
    def mcp(self) -> Server:
        """Get the MCP server instance."""
        return self._mcp

    def _create_lifespan(self) -> Callable[[Server], AbstractAsyncContextManager[None]]:
        """Create the lifespan context manager for the MCP server."""
        server_self = self

        @asynccontextmanager
        async def lifespan(_app: Server) -> AsyncIterator[None]:
            """Close the HTTP client when the session ends."""
            logger.info(
                f"Starting Proxmox MCP server for {server_self._config.host}:{server_self._config.port}"
            )
            try:
                yield
            finally:
                logger.info("Shutting down Proxmox MCP server...")
                await server_self._client.aclose()

        return lifespan

    def _create_mcp(self) -> Server:
        mcp: Server = Server(
            SERVER_NAME,
            version=__version__,
            instructions="MCP server for Proxmox VE - lists nodes, virtual machines "
            "and containers and starts or stops guests.",
            lifespan=self._create_lifespan(),
        )

        gateway = self._gateway

        @mcp.list_tools()
        async def handle_list_tools() -> list[types.Tool]:
            return gateway.list_tools()

        async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
            # McpError from the gateway propagates as a JSON-RPC error, not a tool result.
            content = await gateway.call_tool(req.params.name, req.params.arguments)
            return types.ServerResult(types.CallToolResult(content=content))

        mcp.request_handlers[types.CallToolRequest] = handle_call_tool

        logger.debug(f"Registered {len(gateway.list_tools())} tools")
        return mcp

    async def run(self) -> None:
        """Serve MCP requests on stdin/stdout until the client disconnects."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Proxmox MCP server running on stdio")
            await self._mcp.run(
                read_stream,
                write_stream,
                self._mcp.create_initialization_options(),
            )


def create_server(config: ProxmoxConfig) -> ProxmoxMCPServer:
    """Create the MCP server for a resolved configuration."""
    return ProxmoxMCPServer(config)
