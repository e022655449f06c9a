"""
MCP tool schema -> chat-completion function declaration.

The conversion is a fixed table from descriptor fields to declaration
fields, so every field of the declaration has exactly one source:

    ToolDescriptor.name                     -> function.name
    ToolDescriptor.description              -> function.description
    ToolDescriptor.input_schema.properties  -> function.parameters.properties
    ToolDescriptor.input_schema.required    -> function.parameters.required

``parameters.type`` is always ``"object"``.
"""

from typing import Any, Callable, Iterable

from mcp_relay.domain.entities.tool import ToolDescriptor


FIELD_MAP: dict[tuple[str, ...], Callable[[ToolDescriptor], Any]] = {
    ("name",): lambda tool: tool.name,
    ("description",): lambda tool: tool.description or "",
    ("parameters", "properties"): lambda tool: dict(tool.properties),
    ("parameters", "required"): lambda tool: list(tool.required),
}


def to_function_declaration(tool: ToolDescriptor) -> dict:
    """Translate one tool descriptor into an OpenAI-style function declaration."""
    function: dict[str, Any] = {"parameters": {"type": "object"}}

    for path, getter in FIELD_MAP.items():
        target = function
        for key in path[:-1]:
            target = target[key]
        target[path[-1]] = getter(tool)

    return {"type": "function", "function": function}


def to_function_declarations(tools: Iterable[ToolDescriptor]) -> list[dict]:
    """Translate a whole catalog, keeping its order."""
    return [to_function_declaration(tool) for tool in tools]
