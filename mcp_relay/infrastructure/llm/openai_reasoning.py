"""
Reasoning service backed by an OpenAI-compatible chat-completion endpoint.

Conversation logs are translated into LangChain messages, tool declarations
are bound with ``bind_tools`` and the model's tool calls are translated back
into domain invocation requests.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, ToolMessage
from langchain_openai import ChatOpenAI

from mcp_relay.application.interfaces.i_reasoning_service import IReasoningService
from mcp_relay.domain.entities.conversation import (
    AssistantMessage,
    ConversationLog,
    ToolResultMessage,
    UserMessage,
)
from mcp_relay.domain.entities.tool import ToolInvocationRequest
from mcp_relay.domain.exceptions.domain_exceptions import ReasoningServiceError

logger = logging.getLogger(__name__)


def to_langchain_messages(conversation: ConversationLog) -> list[BaseMessage]:
    """Convert a conversation log to LangChain chat messages."""
    messages: list[BaseMessage] = []
    for message in conversation:
        if isinstance(message, UserMessage):
            messages.append(HumanMessage(content=message.content))
        elif isinstance(message, AssistantMessage):
            messages.append(
                AIMessage(
                    content=message.content or "",
                    tool_calls=[
                        {"id": call.id, "name": call.name, "args": call.arguments}
                        for call in message.tool_calls
                    ],
                )
            )
        elif isinstance(message, ToolResultMessage):
            messages.append(
                ToolMessage(content=message.content, tool_call_id=message.tool_call_id)
            )
    return messages


def to_assistant_message(response: AIMessage) -> AssistantMessage:
    """Convert a LangChain AI message back to a domain assistant message."""
    invalid = getattr(response, "invalid_tool_calls", None) or []
    if invalid:
        names = ", ".join(str(call.get("name")) for call in invalid)
        raise ReasoningServiceError(f"Model returned malformed tool calls: {names}")

    content = response.content
    if isinstance(content, list):
        content = "".join(
            part if isinstance(part, str) else str(part.get("text", ""))
            for part in content
        )

    return AssistantMessage(
        content=content or None,
        tool_calls=tuple(
            ToolInvocationRequest(
                id=call["id"] or "",
                name=call["name"],
                arguments=dict(call.get("args") or {}),
            )
            for call in response.tool_calls
        ),
    )


@dataclass
class OpenAIReasoningService(IReasoningService):
    """Chat-completion client for any OpenAI-compatible endpoint."""

    api_key: str
    base_url: str
    model_name: str = "qwen-plus"

    def __post_init__(self) -> None:
        self._llm = ChatOpenAI(
            model=self.model_name,
            api_key=self.api_key,
            base_url=self.base_url,
        )

    async def complete(
        self,
        conversation: ConversationLog,
        tools: Optional[list[dict]] = None,
    ) -> AssistantMessage:
        runnable = self._llm.bind_tools(tools) if tools else self._llm
        messages = to_langchain_messages(conversation)

        logger.debug(
            "Calling %s with %d messages and %d tools",
            self.model_name,
            len(messages),
            len(tools or []),
        )
        try:
            response = await runnable.ainvoke(messages)
        except Exception as e:
            raise ReasoningServiceError(f"Reasoning service call failed: {e}") from e

        return to_assistant_message(response)
