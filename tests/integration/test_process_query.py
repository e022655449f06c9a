"""
Integration tests for the query use case.

These tests drive ProcessQueryUseCase with mocked MCP client and reasoning
service and check the order and number of calls made for one query.
"""

import pytest
from unittest.mock import AsyncMock
from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS, CallToolResult, ErrorData, TextContent

from mcp_relay.application.use_cases.process_query import (
    FALLBACK_ANSWER,
    ProcessQueryUseCase,
)
from mcp_relay.domain.entities.conversation import (
    AssistantMessage,
    ToolResultMessage,
    UserMessage,
)
from mcp_relay.domain.entities.tool import ToolInvocationResult
from mcp_relay.domain.exceptions.domain_exceptions import ReasoningServiceError
from mcp_relay.infrastructure.mcp.client.mcp_client import MCPClient


def recording_reasoning(mock: AsyncMock, replies: list[AssistantMessage]) -> list[tuple]:
    """Make the mock reply in order and record a snapshot of every call."""
    snapshots: list[tuple] = []
    replies = list(replies)

    async def complete(conversation, tools=None):
        snapshots.append((conversation.messages, tools))
        return replies.pop(0)

    mock.complete.side_effect = complete
    return snapshots


@pytest.mark.asyncio
class TestProcessQueryUseCase:
    """Tests for ProcessQueryUseCase."""

    @pytest.fixture
    def use_case(self, mock_mcp_client, mock_reasoning_service) -> ProcessQueryUseCase:
        return ProcessQueryUseCase(
            mcp_client=mock_mcp_client,
            reasoning_service=mock_reasoning_service,
        )

    async def test_no_tool_calls_single_round_trip(
        self, use_case, mock_mcp_client, mock_reasoning_service
    ):
        """Test that a plain answer makes exactly one reasoning call."""
        result = await use_case.execute("Hello")

        assert result.answer == "Hello there!"
        assert result.tool_calls == []
        assert result.reasoning_calls == 1
        mock_reasoning_service.complete.assert_called_once()
        mock_mcp_client.call_tool.assert_not_called()

    async def test_first_call_sends_user_message_and_catalog(
        self, use_case, mock_reasoning_service
    ):
        snapshots = recording_reasoning(
            mock_reasoning_service, [AssistantMessage(content="Hi")]
        )

        await use_case.execute("Hello")

        messages, tools = snapshots[0]
        assert messages == (UserMessage(content="Hello"),)
        assert [t["function"]["name"] for t in tools] == [
            "getWeather",
            "getTodayMatchResult",
        ]

    async def test_empty_answer_falls_back(self, use_case, mock_reasoning_service):
        mock_reasoning_service.complete.return_value = AssistantMessage(content=None)

        result = await use_case.execute("???")

        assert result.answer == FALLBACK_ANSWER

    async def test_empty_catalog_sends_no_tools(
        self, use_case, mock_mcp_client, mock_reasoning_service
    ):
        mock_mcp_client.tools = []
        snapshots = recording_reasoning(
            mock_reasoning_service, [AssistantMessage(content="Hi")]
        )

        await use_case.execute("Hello")

        assert snapshots[0][1] is None

    async def test_k_tool_calls(
        self, use_case, mock_mcp_client, mock_reasoning_service, weather_call, match_call
    ):
        """Test K tool calls lead to K invocations and two reasoning calls."""
        snapshots = recording_reasoning(
            mock_reasoning_service,
            [
                AssistantMessage(tool_calls=(weather_call, match_call)),
                AssistantMessage(content="Summary"),
            ],
        )

        result = await use_case.execute("Weather and match?")

        assert mock_mcp_client.call_tool.call_count == 2
        assert mock_reasoning_service.complete.call_count == 2
        assert result.reasoning_calls == 2

        messages, tools = snapshots[1]
        assert tools is None
        assert [type(m) for m in messages] == [
            UserMessage,
            AssistantMessage,
            ToolResultMessage,
            AssistantMessage,
            ToolResultMessage,
        ]
        assert messages[1].tool_calls == (weather_call,)
        assert messages[2].tool_call_id == "call_1"
        assert messages[3].tool_calls == (match_call,)
        assert messages[4].tool_call_id == "call_2"

    async def test_invocations_follow_model_order(
        self, use_case, mock_mcp_client, mock_reasoning_service, weather_call, match_call
    ):
        order: list[str] = []

        async def call_tool(request):
            order.append(f"start:{request.id}")
            result = ToolInvocationResult(call_id=request.id, content="ok")
            order.append(f"end:{request.id}")
            return result

        mock_mcp_client.call_tool.side_effect = call_tool
        recording_reasoning(
            mock_reasoning_service,
            [
                AssistantMessage(tool_calls=(match_call, weather_call)),
                AssistantMessage(content="done"),
            ],
        )

        await use_case.execute("query")

        assert order == ["start:call_2", "end:call_2", "start:call_1", "end:call_1"]

    async def test_answer_contains_traces_then_summary(
        self, use_case, mock_mcp_client, mock_reasoning_service, weather_call, match_call
    ):
        """Test results A and B with summary C are rendered in order."""
        results = {"call_1": "A", "call_2": "B"}

        async def call_tool(request):
            return ToolInvocationResult(call_id=request.id, content=results[request.id])

        mock_mcp_client.call_tool.side_effect = call_tool
        recording_reasoning(
            mock_reasoning_service,
            [
                AssistantMessage(tool_calls=(weather_call, match_call)),
                AssistantMessage(content="C"),
            ],
        )

        result = await use_case.execute("query")

        first = result.answer.index("getWeather")
        second = result.answer.index("getTodayMatchResult")
        summary = result.answer.rindex("C")
        assert first < second < summary
        assert result.answer.endswith("\n\nC")
        assert '{"city": "Paris"}' in result.answer
        assert [t.result for t in result.tool_calls] == ["A", "B"]

    async def test_tool_failure_does_not_stop_batch(
        self, use_case, mock_mcp_client, mock_reasoning_service, weather_call, match_call
    ):
        """Test an error payload is recorded and the batch continues."""

        async def call_tool(request):
            if request.id == "call_1":
                return ToolInvocationResult(
                    call_id=request.id, content="Unknown tool: getWeather", is_error=True
                )
            return ToolInvocationResult(call_id=request.id, content="B")

        mock_mcp_client.call_tool.side_effect = call_tool
        snapshots = recording_reasoning(
            mock_reasoning_service,
            [
                AssistantMessage(tool_calls=(weather_call, match_call)),
                AssistantMessage(content="Partial answer"),
            ],
        )

        result = await use_case.execute("query")

        assert mock_mcp_client.call_tool.call_count == 2
        assert mock_reasoning_service.complete.call_count == 2
        assert snapshots[1][0][2].content == "Unknown tool: getWeather"
        assert result.tool_calls[0].is_error is True
        assert result.tool_calls[1].is_error is False

    async def test_json_rpc_tool_error_does_not_stop_batch(
        self, mock_reasoning_service, weather_call, match_call
    ):
        """Test a host error reply is relayed and later calls still run."""
        client = MCPClient()
        client._session = AsyncMock()
        client._tools = ()

        async def call_tool(name, arguments):
            if name == "getWeather":
                raise McpError(ErrorData(code=INVALID_PARAMS, message="Tool getWeather failed"))
            return CallToolResult(content=[TextContent(type="text", text="fine")])

        client._session.call_tool.side_effect = call_tool
        snapshots = recording_reasoning(
            mock_reasoning_service,
            [
                AssistantMessage(tool_calls=(weather_call, match_call)),
                AssistantMessage(content="Summary"),
            ],
        )
        use_case = ProcessQueryUseCase(
            mcp_client=client, reasoning_service=mock_reasoning_service
        )

        result = await use_case.execute("query")

        assert client._session.call_tool.call_count == 2
        assert mock_reasoning_service.complete.call_count == 2
        assert result.reasoning_calls == 2
        messages = snapshots[1][0]
        assert messages[2].content == "Tool getWeather failed"
        assert messages[4].content == "fine"
        assert [t.is_error for t in result.tool_calls] == [True, False]
        assert result.answer.endswith("Summary")

    async def test_reasoning_error_propagates(self, use_case, mock_reasoning_service):
        mock_reasoning_service.complete.side_effect = ReasoningServiceError("boom")

        with pytest.raises(ReasoningServiceError):
            await use_case.execute("query")

    async def test_transport_error_propagates(
        self, use_case, mock_mcp_client, mock_reasoning_service, weather_call
    ):
        mock_mcp_client.call_tool.side_effect = ConnectionResetError("pipe closed")
        mock_reasoning_service.complete.return_value = AssistantMessage(
            tool_calls=(weather_call,)
        )

        with pytest.raises(ConnectionResetError):
            await use_case.execute("query")

        mock_reasoning_service.complete.assert_called_once()

    async def test_no_memory_across_queries(self, use_case, mock_reasoning_service):
        snapshots = recording_reasoning(
            mock_reasoning_service,
            [AssistantMessage(content="one"), AssistantMessage(content="two")],
        )

        await use_case.execute("first")
        await use_case.execute("second")

        assert snapshots[1][0] == (UserMessage(content="second"),)
