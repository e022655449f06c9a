"""
Shared pytest fixtures for all tests.
"""

import pytest
from unittest.mock import AsyncMock
from typing import List

from mcp_relay.domain.entities.tool import (
    ToolDescriptor,
    ToolInvocationRequest,
    ToolInvocationResult,
)
from mcp_relay.domain.entities.conversation import AssistantMessage
from mcp_relay.application.interfaces.i_mcp_client import IMCPClient
from mcp_relay.application.interfaces.i_reasoning_service import IReasoningService


# ============================================================================
# Tool Fixtures
# ============================================================================


@pytest.fixture
def weather_tool() -> ToolDescriptor:
    return ToolDescriptor(
        name="getWeather",
        description="get weather of a city",
        input_schema={
            "type": "object",
            "properties": {"city": {"type": "string"}},
            "required": ["city"],
        },
    )


@pytest.fixture
def match_tool() -> ToolDescriptor:
    return ToolDescriptor(
        name="getTodayMatchResult",
        description="get the result of one NBA match played today",
        input_schema={
            "type": "object",
            "properties": {
                "date": {"type": "string"},
                "team1": {"type": "string"},
                "team2": {"type": "string"},
            },
            "required": ["date", "team1", "team2"],
        },
    )


@pytest.fixture
def tool_catalog(weather_tool, match_tool) -> List[ToolDescriptor]:
    return [weather_tool, match_tool]


@pytest.fixture
def weather_call() -> ToolInvocationRequest:
    return ToolInvocationRequest(id="call_1", name="getWeather", arguments={"city": "Paris"})


@pytest.fixture
def match_call() -> ToolInvocationRequest:
    return ToolInvocationRequest(
        id="call_2",
        name="getTodayMatchResult",
        arguments={"date": "2024-01-15", "team1": "Lakers", "team2": "Celtics"},
    )


# ============================================================================
# Mock Service Fixtures
# ============================================================================


@pytest.fixture
def mock_mcp_client(tool_catalog) -> AsyncMock:
    """Mock IMCPClient that echoes a result for every call."""
    mock = AsyncMock(spec=IMCPClient)
    mock.tools = tool_catalog

    async def call_tool(request: ToolInvocationRequest) -> ToolInvocationResult:
        return ToolInvocationResult(call_id=request.id, content=f"result of {request.name}")

    mock.call_tool.side_effect = call_tool
    return mock


@pytest.fixture
def mock_reasoning_service() -> AsyncMock:
    """Mock IReasoningService answering without tool calls."""
    mock = AsyncMock(spec=IReasoningService)
    mock.complete.return_value = AssistantMessage(content="Hello there!")
    return mock


# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
