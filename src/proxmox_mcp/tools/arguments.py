"""Argument models for MCP tool calls.

Tool arguments arrive as an untyped mapping. Each tool declares one of the
models below and the gateway validates the mapping against it before any
client call is made.
"""

from typing import Annotated, Any, TypeVar

import pydantic
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictStr

from proxmox_mcp.utils.errors import ValidationError


def _coerce_vmid(value: Any) -> Any:
    """Accept an integer or a string of digits."""
    # bool is an int subclass
    if isinstance(value, bool):
        raise ValueError("vmid must be an integer or a string of digits")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValueError("vmid must be an integer or a string of digits")


NodeName = Annotated[StrictStr, Field(min_length=1, description="Node name")]
GuestId = Annotated[int, BeforeValidator(_coerce_vmid), Field(ge=1, description="Guest id")]


class ToolArguments(BaseModel):
    """Base for tool argument models.

    Values are not coerced between types; unknown keys are ignored.
    """

    model_config = ConfigDict(
        strict=True,
        str_strip_whitespace=True,
        extra="ignore",
        frozen=True,
    )


class NoArguments(ToolArguments):
    """Tools that take no input."""


class NodeFilterArguments(ToolArguments):
    """Optional node restriction for listing tools."""

    node: StrictStr | None = Field(None, description="Node name; all nodes when omitted")


class NodeArguments(ToolArguments):
    """Tools addressing a single node."""

    node: NodeName


class GuestArguments(ToolArguments):
    """Tools addressing a single VM or container."""

    node: NodeName
    vmid: GuestId


ArgumentsT = TypeVar("ArgumentsT", bound=ToolArguments)


def parse_arguments(
    model: type[ArgumentsT], tool_name: str, arguments: dict[str, Any] | None
) -> ArgumentsT:
    """Validate raw tool arguments.

    Raises:
        ValidationError: If a required argument is missing, empty or of the
            wrong type.
    """
    try:
        return model.model_validate(arguments or {})
    except pydantic.ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'arguments'}: {err['msg']}"
            for err in e.errors()
        )
        raise ValidationError(f"Invalid arguments for {tool_name}: {problems}") from e
