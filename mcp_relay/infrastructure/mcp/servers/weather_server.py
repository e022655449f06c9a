"""
MCP Server for weather and match lookups.

A demonstration tool server with a fixed catalog of two tools. The tools are
deterministic text formatters: they do no I/O and keep no state.

Usage:
    Run as standalone server:
        python -m mcp_relay.infrastructure.mcp.servers.weather_server

    Or point the client at this file:
        mcp-relay path/to/weather_server.py
"""

import asyncio
import logging
import sys
from typing import Any, Callable

from mcp.server import Server, NotificationOptions
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from mcp_relay.domain.exceptions.domain_exceptions import (
    InvalidToolArgumentsError,
    UnknownToolError,
)

logger = logging.getLogger(__name__)


def get_weather(city: str) -> str:
    return (
        f"The weather in {city} is lovely today: clear skies and sunshine, "
        "but not too hot. A great day for the whole family to go out."
    )


def get_today_match_result(date: str, team1: str, team2: str) -> str:
    return f"Today is {date}, the result of the match between {team1} and {team2} is:"


TOOLS: list[Tool] = [
    Tool(
        name="getWeather",
        description="get weather of a city",
        inputSchema={
            "type": "object",
            "properties": {
                "city": {
                    "type": "string",
                    "description": "Name of the city",
                }
            },
            "required": ["city"],
        },
    ),
    Tool(
        name="getTodayMatchResult",
        description="get the result of one NBA match played today",
        inputSchema={
            "type": "object",
            "properties": {
                "date": {"type": "string", "description": "Date of the match"},
                "team1": {"type": "string", "description": "Home team"},
                "team2": {"type": "string", "description": "Away team"},
            },
            "required": ["date", "team1", "team2"],
        },
    ),
]

HANDLERS: dict[str, Callable[..., str]] = {
    "getWeather": get_weather,
    "getTodayMatchResult": get_today_match_result,
}


def validate_arguments(tool: Tool, arguments: dict[str, Any] | None) -> dict[str, str]:
    """Check arguments against the tool's declared string parameters."""
    arguments = arguments or {}
    schema = tool.inputSchema
    properties = schema.get("properties", {})

    missing = [name for name in schema.get("required", []) if name not in arguments]
    if missing:
        raise InvalidToolArgumentsError(
            f"Missing required arguments for {tool.name}: {', '.join(missing)}"
        )

    unexpected = [name for name in arguments if name not in properties]
    if unexpected:
        raise InvalidToolArgumentsError(
            f"Unexpected arguments for {tool.name}: {', '.join(unexpected)}"
        )

    for name, value in arguments.items():
        if not isinstance(value, str):
            raise InvalidToolArgumentsError(
                f"Argument '{name}' of {tool.name} must be a string"
            )

    return arguments


class WeatherMCPServer:
    """MCP Server exposing the weather and match result tools."""

    def __init__(self, name: str = "weather", version: str = "1.0.0"):
        self.tools = {tool.name: tool for tool in TOOLS}
        self.server = Server(name, version=version)
        self._register_handlers()

    def _register_handlers(self) -> None:
        """Register MCP tool handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            return list(self.tools.values())

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
            return [TextContent(type="text", text=self.invoke(name, arguments))]

    def invoke(self, name: str, arguments: dict[str, Any] | None) -> str:
        """Run a tool by name; raises on unknown tools or bad arguments."""
        tool = self.tools.get(name)
        if tool is None:
            raise UnknownToolError(f"Unknown tool: {name}")

        validated = validate_arguments(tool, arguments)
        logger.info("Calling tool %s with %s", name, validated)
        return HANDLERS[name](**validated)

    async def run(self) -> None:
        """Run the MCP server over stdio."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            )


def main() -> None:
    # stdout carries the protocol, so logs must go to stderr
    logging.basicConfig(level=logging.WARNING, stream=sys.stderr)
    asyncio.run(WeatherMCPServer().run())


if __name__ == "__main__":
    main()
