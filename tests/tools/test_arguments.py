"""Tests for tool argument models."""

import pydantic
import pytest

from proxmox_mcp.tools.arguments import (
    GuestArguments,
    NoArguments,
    NodeArguments,
    NodeFilterArguments,
    parse_arguments,
)
from proxmox_mcp.utils.errors import ValidationError


class TestGuestArguments:
    """Tests for node + vmid arguments."""

    @pytest.mark.parametrize("vmid", [100, "100", " 100 "])
    def test_vmid_accepts_integers_and_digit_strings(self, vmid: int | str) -> None:
        """Test vmid is normalized to an integer."""
        args = parse_arguments(GuestArguments, "start_vm", {"node": "pve1", "vmid": vmid})
        assert args.vmid == 100
        assert args.node == "pve1"

    @pytest.mark.parametrize("vmid", ["", "abc", "-5", "1e3", 0, -1, 1.0, True, None, [100]])
    def test_vmid_rejects_other_values(self, vmid: object) -> None:
        """Test anything but a positive id is rejected."""
        with pytest.raises(ValidationError, match="vmid"):
            parse_arguments(GuestArguments, "start_vm", {"node": "pve1", "vmid": vmid})

    def test_node_is_stripped(self) -> None:
        """Test surrounding whitespace is removed from the node name."""
        args = parse_arguments(GuestArguments, "stop_vm", {"node": " pve1 ", "vmid": 1})
        assert args.node == "pve1"

    def test_message_names_tool_and_field(self) -> None:
        """Test the error message is readable."""
        with pytest.raises(ValidationError) as exc_info:
            parse_arguments(GuestArguments, "get_vm_status", {"vmid": 100})

        message = str(exc_info.value)
        assert message.startswith("Invalid arguments for get_vm_status:")
        assert "node: Field required" in message


class TestOtherArguments:
    """Tests for the remaining argument models."""

    def test_no_arguments_ignores_extras(self) -> None:
        """Test unknown keys are dropped."""
        args = parse_arguments(NoArguments, "list_nodes", {"verbose": True})
        assert args.model_dump() == {}

    def test_none_is_empty_mapping(self) -> None:
        """Test a missing argument mapping is treated as empty."""
        args = parse_arguments(NodeFilterArguments, "list_vms", None)
        assert args.node is None

    def test_node_filter_rejects_non_strings(self) -> None:
        """Test the optional node must still be a string."""
        with pytest.raises(ValidationError, match="node"):
            parse_arguments(NodeFilterArguments, "list_vms", {"node": 1})

    def test_node_arguments_require_node(self) -> None:
        """Test node is required."""
        with pytest.raises(ValidationError, match="node"):
            parse_arguments(NodeArguments, "get_node_status", {})

    def test_arguments_are_frozen(self) -> None:
        """Test parsed arguments cannot be modified."""
        args = parse_arguments(NodeArguments, "get_node_status", {"node": "pve1"})
        with pytest.raises(pydantic.ValidationError):
            args.node = "pve2"  # type: ignore[misc]
