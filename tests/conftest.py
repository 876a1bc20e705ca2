"""Shared pytest fixtures for Proxmox MCP tests."""

import os
from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from fake_proxmox import FakeProxmox

from proxmox_mcp.clients.base import ProxmoxClient
from proxmox_mcp.config import ProxmoxConfig


@pytest.fixture(autouse=True)
def clean_proxmox_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the developer's environment and .env out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith("PROXMOX_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake_api() -> FakeProxmox:
    """A fake Proxmox API with the login route in place."""
    return FakeProxmox()


@pytest.fixture
def password_config() -> ProxmoxConfig:
    """Ticket-based configuration."""
    return ProxmoxConfig(host="pve.local", username="root", password="secret", realm="pam")


@pytest.fixture
def token_config() -> ProxmoxConfig:
    """API token configuration."""
    return ProxmoxConfig(
        host="pve.local",
        username="root",
        realm="pam",
        token_name="mcp",
        token="0d6a9a3e-5c4f-4a7e-9a4b-1d2e3f4a5b6c",
    )


@pytest.fixture
async def client(
    password_config: ProxmoxConfig, fake_api: FakeProxmox
) -> AsyncIterator[ProxmoxClient]:
    """A ticket-authenticated client talking to the fake API."""
    async with ProxmoxClient(password_config, transport=fake_api.transport) as c:
        yield c


@pytest.fixture
def two_node_cluster(fake_api: FakeProxmox) -> FakeProxmox:
    """Nodes pve1 and pve2 with two VMs and one container each."""
    fake_api.add(
        "GET",
        "/nodes",
        json={
            "data": [
                {
                    "node": "pve1",
                    "status": "online",
                    "cpu": 0.05,
                    "maxcpu": 8,
                    "mem": 4294967296,
                    "maxmem": 34359738368,
                    "disk": 10737418240,
                    "maxdisk": 107374182400,
                    "uptime": 86400,
                },
                {"node": "pve2", "status": "offline"},
            ]
        },
    )
    fake_api.add(
        "GET",
        "/nodes/pve1/qemu",
        json={
            "data": [
                {"vmid": 100, "name": "web", "status": "running", "cpus": 2, "uptime": 3600},
                {"vmid": 101, "name": "db", "status": "stopped", "cpus": 4},
            ]
        },
    )
    fake_api.add(
        "GET",
        "/nodes/pve2/qemu",
        json={
            "data": [
                {"vmid": 200, "name": "build", "status": "running", "cpus": 8},
                {"vmid": 201, "name": "ci", "status": "stopped", "cpus": 2},
            ]
        },
    )
    fake_api.add(
        "GET",
        "/nodes/pve1/lxc",
        json={"data": [{"vmid": 300, "name": "dns", "status": "running", "cpus": 1}]},
    )
    fake_api.add(
        "GET",
        "/nodes/pve2/lxc",
        json={"data": [{"vmid": 301, "name": "proxy", "status": "running", "cpus": 1}]},
    )
    return fake_api
