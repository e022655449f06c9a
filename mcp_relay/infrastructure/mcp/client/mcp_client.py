"""
MCP Client.

This module provides a client that launches one MCP server script over stdio,
keeps the session open for its whole lifetime and invokes the server's tools.

The tool catalog is discovered once, right after initialization, and cached
until the client is closed.
"""

import json
import logging
from contextlib import AsyncExitStack
from typing import Sequence

from mcp import ClientSession
from mcp.client.stdio import stdio_client, StdioServerParameters
from mcp.shared.exceptions import McpError
from mcp.types import CONNECTION_CLOSED, CallToolResult, Implementation, TextContent

from mcp_relay.application.interfaces.i_mcp_client import IMCPClient
from mcp_relay.domain.entities.tool import (
    ToolDescriptor,
    ToolInvocationRequest,
    ToolInvocationResult,
)
from mcp_relay.domain.exceptions.domain_exceptions import ServerConnectionError
from mcp_relay.domain.value_objects.server_script import ServerScript

logger = logging.getLogger(__name__)


class MCPClient(IMCPClient):
    """Owns the connection to a single MCP server launched as a subprocess."""

    def __init__(self, client_name: str = "mcp-client-cli", client_version: str = "1.0.0"):
        self._client_info = Implementation(name=client_name, version=client_version)
        self._exit_stack: AsyncExitStack | None = None
        self._session: ClientSession | None = None
        self._tools: tuple[ToolDescriptor, ...] = ()

    @property
    def tools(self) -> Sequence[ToolDescriptor]:
        return self._tools

    @property
    def is_connected(self) -> bool:
        return self._session is not None

    async def connect(self, server_script: str) -> None:
        """Launch the server script, initialize the session and list its tools."""
        if self._session is not None:
            raise ServerConnectionError("Client is already connected")

        script = ServerScript(server_script)
        server_params = StdioServerParameters(command=script.command, args=script.args)
        logger.info("Launching MCP server: %s %s", script.command, script)

        stack = AsyncExitStack()
        try:
            read, write = await stack.enter_async_context(stdio_client(server_params))
            session = await stack.enter_async_context(
                ClientSession(read, write, client_info=self._client_info)
            )
            await session.initialize()
            result = await session.list_tools()
        except Exception as e:
            await stack.aclose()
            raise ServerConnectionError(
                f"Could not connect to MCP server {script}: {e}"
            ) from e

        self._exit_stack = stack
        self._session = session
        self._tools = tuple(
            ToolDescriptor(
                name=tool.name,
                description=tool.description or "",
                input_schema=dict(tool.inputSchema or {}),
            )
            for tool in result.tools
        )
        logger.info("Discovered %d tools: %s", len(self._tools), self.tool_names)

    @property
    def tool_names(self) -> list[str]:
        return [tool.name for tool in self._tools]

    async def call_tool(self, request: ToolInvocationRequest) -> ToolInvocationResult:
        """Call a tool on the MCP server and flatten its content to text."""
        if self._session is None:
            raise RuntimeError("Not connected to any server")

        try:
            result = await self._session.call_tool(request.name, request.arguments)
        except McpError as e:
            # A JSON-RPC error reply is a tool failure; a dropped connection is not
            if e.error.code == CONNECTION_CLOSED:
                raise
            logger.warning("Tool %s failed: %s", request.name, e.error.message)
            return ToolInvocationResult(
                call_id=request.id, content=e.error.message, is_error=True
            )

        return ToolInvocationResult(
            call_id=request.id,
            content=flatten_content(result),
            is_error=bool(result.isError),
        )

    async def close(self) -> None:
        """Terminate the session and server process. Safe to call twice."""
        stack, self._exit_stack = self._exit_stack, None
        self._session = None
        self._tools = ()
        if stack is not None:
            await stack.aclose()
            logger.info("MCP server connection closed")


def flatten_content(result: CallToolResult) -> str:
    """Join text parts into one blob; other parts are serialized as JSON."""
    parts: list[str] = []
    for item in result.content:
        if isinstance(item, TextContent):
            parts.append(item.text)
        else:
            parts.append(item.model_dump_json(exclude_none=True))

    if not parts and result.structuredContent:
        return json.dumps(result.structuredContent, ensure_ascii=False)

    return "".join(parts)
