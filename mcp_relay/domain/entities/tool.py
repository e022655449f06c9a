from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ToolDescriptor:
    """A tool declared by an MCP server, as discovered by the client."""

    name: str
    description: str
    input_schema: dict = field(default_factory=dict)

    @property
    def properties(self) -> dict:
        return self.input_schema.get("properties") or {}

    @property
    def required(self) -> list[str]:
        return list(self.input_schema.get("required") or [])


@dataclass(frozen=True)
class ToolInvocationRequest:
    """A tool call requested by the reasoning service."""

    id: str
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolInvocationResult:
    """Result of one tool call, tied to its request by ``call_id``."""

    call_id: str
    content: str
    is_error: bool = False
