from abc import ABC, abstractmethod
from typing import Sequence

from mcp_relay.domain.entities.tool import (
    ToolDescriptor,
    ToolInvocationRequest,
    ToolInvocationResult,
)


class IMCPClient(ABC):
    """Interface for MCP (Model Context Protocol) client operations.

    A client owns one connection to one tool server for its whole lifetime.
    This interface abstracts the MCP client so the query loop can be tested
    without spawning a server process.
    """

    @abstractmethod
    async def connect(self, server_script: str) -> None:
        """Launch the server script, connect and discover its tools."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the server process and session."""
        pass

    @property
    @abstractmethod
    def tools(self) -> Sequence[ToolDescriptor]:
        """Tool catalog cached at connection time."""
        pass

    @abstractmethod
    async def call_tool(self, request: ToolInvocationRequest) -> ToolInvocationResult:
        """Call a tool on the MCP server."""
        pass
