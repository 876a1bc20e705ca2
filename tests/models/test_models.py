"""Tests for Proxmox resource models."""

from proxmox_mcp.models.common import Guest, GuestKind, Node, TaskReference, to_jsonable


class TestGuestKind:
    """Tests for GuestKind enum."""

    def test_values_match_api_paths(self) -> None:
        """Test enum values are the API sub-resource names."""
        assert GuestKind.QEMU.value == "qemu"
        assert GuestKind.LXC.value == "lxc"

    def test_labels(self) -> None:
        """Test labels used in messages."""
        assert GuestKind.QEMU.label == "VM"
        assert GuestKind.LXC.label == "container"


class TestGuest:
    """Tests for Guest model."""

    def test_from_api_tags_node(self) -> None:
        """Test the owning node is added to the API entry."""
        guest = Guest.from_api({"vmid": 100, "name": "web", "status": "running"}, "pve1")

        assert guest.node == "pve1"
        assert guest.vmid == 100

    def test_unknown_fields_are_kept(self) -> None:
        """Test extra API fields survive serialization."""
        guest = Guest.from_api(
            {"vmid": 100, "status": "running", "template": 0, "tags": "prod;web"}, "pve1"
        )

        dumped = to_jsonable([guest])[0]
        assert dumped["tags"] == "prod;web"
        assert dumped["template"] == 0

    def test_vmid_from_string(self) -> None:
        """Test string ids from the API become integers."""
        assert Guest.model_validate({"vmid": "101"}).vmid == 101


class TestNode:
    """Tests for Node model."""

    def test_offline_node_dump_omits_metrics(self) -> None:
        """Test missing metrics are not emitted as nulls."""
        node = Node.model_validate({"node": "pve2", "status": "offline"})

        assert to_jsonable([node]) == [{"node": "pve2", "status": "offline"}]

    def test_online_node(self) -> None:
        """Test metrics are parsed."""
        node = Node.model_validate(
            {"node": "pve1", "status": "online", "cpu": 0.12, "maxcpu": 16, "uptime": 100}
        )

        assert node.cpu == 0.12
        assert node.maxcpu == 16


def test_task_reference_str_is_upid() -> None:
    """Test the task reference prints as the raw UPID."""
    upid = "UPID:pve1:0001A2B3:0C4D5E6F:6523A1B2:qmstart:100:root@pam:"
    assert str(TaskReference(upid=upid)) == upid
