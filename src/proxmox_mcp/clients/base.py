"""Async client for the Proxmox VE JSON API."""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import ValidationError as ModelValidationError

from proxmox_mcp import __version__
from proxmox_mcp.config import ProxmoxConfig
from proxmox_mcp.models.common import Guest, GuestKind, Node, TaskReference
from proxmox_mcp.utils.errors import (
    AuthenticationError,
    ConfigurationError,
    UpstreamError,
    ValidationError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

TOKEN_SCHEME = "PVEAPIToken"
AUTH_COOKIE_NAME = "PVEAuthCookie"
CSRF_HEADER = "CSRFPreventionToken"


def _describe_error(exc: httpx.HTTPError) -> str:
    """Summarize an httpx error, including the API's own message if any."""
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        detail = f"HTTP {response.status_code} {response.reason_phrase}".rstrip()
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            if body.get("errors"):
                detail += f": {body['errors']}"
            elif body.get("message"):
                detail += f": {str(body['message']).strip()}"
        return detail
    return str(exc) or type(exc).__name__


def _require(**values: Any) -> None:
    """Raise ValidationError if any argument is missing or blank."""
    missing = [
        name
        for name, value in values.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise ValidationError(f"Missing required argument(s): {', '.join(missing)}")


def _segment(value: str | int) -> str:
    return quote(str(value).strip(), safe="")


def _parse_items(data: Any, parse: Callable[[Any], T], operation: str) -> list[T]:
    """Parse a list response, raising UpstreamError if its shape is wrong."""
    if data is None:
        return []
    if not isinstance(data, list):
        raise UpstreamError(operation, f"expected a list, got {type(data).__name__}")
    try:
        return [parse(item) for item in data]
    except (ModelValidationError, TypeError) as e:
        raise UpstreamError(operation, f"unexpected response entry: {e}") from e


class ProxmoxClient:
    """Client for Proxmox VE cluster operations.

    Authentication is lazy: a ticket is obtained on the first request unless
    an API token pair is configured. The ticket is kept for the lifetime of
    the client and is never refreshed.
    """

    def __init__(
        self,
        config: ProxmoxConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._ticket: str | None = None
        self._csrf_token: str | None = None
        self._http = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout,
            verify=config.verify_ssl,
            headers={
                "Accept": "application/json",
                "User-Agent": f"proxmox-mcp/{__version__}",
            },
            transport=transport,
        )

    async def __aenter__(self) -> ProxmoxClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()

    @property
    def config(self) -> ProxmoxConfig:
        """Get the connection configuration."""
        return self._config

    @property
    def is_authenticated(self) -> bool:
        """Whether requests can be sent without logging in first."""
        return self._config.uses_token_auth or self._ticket is not None

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    async def authenticate(self) -> None:
        """Log in with username and password and cache the ticket.

        Raises:
            ConfigurationError: If no password is configured.
            AuthenticationError: If the login request fails.
        """
        if not self._config.password:
            raise ConfigurationError(
                "Password is required for authentication when not using an API token"
            )

        logger.info(f"Authenticating to {self._config.host} as {self._config.user_id}")
        try:
            response = await self._http.post(
                "/access/ticket",
                data={"username": self._config.user_id, "password": self._config.password},
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Authentication to {self._config.host} failed: {e}")
            raise AuthenticationError(f"Authentication failed: {_describe_error(e)}") from e
        except ValueError as e:
            raise AuthenticationError(f"Authentication failed: invalid response body: {e}") from e

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict) or not data.get("ticket"):
            raise AuthenticationError("Authentication failed: no ticket received")

        self._ticket = data["ticket"]
        self._csrf_token = data.get("CSRFPreventionToken")
        logger.info("Ticket authentication successful")

    async def _ensure_authenticated(self) -> None:
        if not self.is_authenticated:
            await self.authenticate()

    def _auth_headers(self) -> dict[str, str]:
        config = self._config
        if config.uses_token_auth:
            return {
                "Authorization": f"{TOKEN_SCHEME}={config.user_id}!{config.token_name}={config.token}"
            }

        headers = {"Cookie": f"{AUTH_COOKIE_NAME}={self._ticket}"}
        if self._csrf_token:
            headers[CSRF_HEADER] = self._csrf_token
        return headers

    async def _request(self, method: str, path: str, operation: str) -> Any:
        """Send an authenticated request and return the response's data field."""
        await self._ensure_authenticated()

        logger.debug(f"{method} {path}")
        try:
            response = await self._http.request(method, path, headers=self._auth_headers())
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            raise UpstreamError(operation, _describe_error(e)) from e
        except ValueError as e:
            raise UpstreamError(operation, f"invalid response body: {e}") from e

        return body.get("data") if isinstance(body, dict) else None

    # -------------------------------------------------------------------------
    # Nodes and cluster
    # -------------------------------------------------------------------------

    async def list_nodes(self) -> list[Node]:
        """List the cluster's nodes in API order."""
        data = await self._request("GET", "/nodes", "list nodes")
        return _parse_items(data, Node.model_validate, "list nodes")

    async def get_node_status(self, node: str) -> dict[str, Any]:
        """Get detailed status for a node."""
        _require(node=node)
        return await self._request("GET", f"/nodes/{_segment(node)}/status", "get node status")

    async def get_cluster_status(self) -> list[dict[str, Any]]:
        """Get cluster membership and quorum information."""
        return await self._request("GET", "/cluster/status", "get cluster status")

    # -------------------------------------------------------------------------
    # Guests
    # -------------------------------------------------------------------------

    async def list_guests(self, kind: GuestKind, node: str | None = None) -> list[Guest]:
        """List guests of one kind on a node, or on every node.

        Without a node, each node is queried in turn. A node whose query
        fails is logged and left out of the result.
        """
        operation = f"list {kind.label}s"
        if node:
            return await self._list_node_guests(kind, node, operation)

        try:
            nodes = await self.list_nodes()
        except UpstreamError as e:
            raise UpstreamError(operation, e.message) from e

        guests: list[Guest] = []
        for info in nodes:
            try:
                guests.extend(await self._list_node_guests(kind, info.node, operation))
            except UpstreamError as e:
                logger.warning(f"Failed to get {kind.label}s from node {info.node}: {e.detail}")
        return guests

    async def _list_node_guests(self, kind: GuestKind, node: str, operation: str) -> list[Guest]:
        data = await self._request("GET", f"/nodes/{_segment(node)}/{kind.value}", operation)
        return _parse_items(data, lambda item: Guest.from_api(item, node), operation)

    def _guest_path(self, kind: GuestKind, node: str, vmid: str | int) -> str:
        _require(node=node, vmid=vmid)
        return f"/nodes/{_segment(node)}/{kind.value}/{_segment(vmid)}"

    async def get_guest_status(
        self, node: str, vmid: str | int, kind: GuestKind = GuestKind.QEMU
    ) -> dict[str, Any]:
        """Get the current status of a guest."""
        path = self._guest_path(kind, node, vmid)
        return await self._request("GET", f"{path}/status/current", f"get {kind.label} status")

    async def start_guest(
        self, node: str, vmid: str | int, kind: GuestKind = GuestKind.QEMU
    ) -> TaskReference:
        """Queue a start task for a guest."""
        return await self._change_state(kind, node, vmid, "start")

    async def stop_guest(
        self, node: str, vmid: str | int, kind: GuestKind = GuestKind.QEMU
    ) -> TaskReference:
        """Queue a stop task for a guest."""
        return await self._change_state(kind, node, vmid, "stop")

    async def _change_state(
        self, kind: GuestKind, node: str, vmid: str | int, action: str
    ) -> TaskReference:
        path = self._guest_path(kind, node, vmid)
        operation = f"{action} {kind.label}"
        upid = await self._request("POST", f"{path}/status/{action}", operation)
        if not upid:
            raise UpstreamError(operation, "response did not include a task id")
        return TaskReference(upid=str(upid))

    # Shorthands per guest kind

    async def list_vms(self, node: str | None = None) -> list[Guest]:
        return await self.list_guests(GuestKind.QEMU, node)

    async def list_containers(self, node: str | None = None) -> list[Guest]:
        return await self.list_guests(GuestKind.LXC, node)

    async def get_vm_status(self, node: str, vmid: str | int) -> dict[str, Any]:
        return await self.get_guest_status(node, vmid, GuestKind.QEMU)

    async def start_vm(self, node: str, vmid: str | int) -> TaskReference:
        return await self.start_guest(node, vmid, GuestKind.QEMU)

    async def stop_vm(self, node: str, vmid: str | int) -> TaskReference:
        return await self.stop_guest(node, vmid, GuestKind.QEMU)

    async def get_container_status(self, node: str, vmid: str | int) -> dict[str, Any]:
        return await self.get_guest_status(node, vmid, GuestKind.LXC)

    async def start_container(self, node: str, vmid: str | int) -> TaskReference:
        return await self.start_guest(node, vmid, GuestKind.LXC)

    async def stop_container(self, node: str, vmid: str | int) -> TaskReference:
        return await self.stop_guest(node, vmid, GuestKind.LXC)
