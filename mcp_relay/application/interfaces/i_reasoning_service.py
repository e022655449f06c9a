from abc import ABC, abstractmethod
from typing import Optional

from mcp_relay.domain.entities.conversation import AssistantMessage, ConversationLog


class IReasoningService(ABC):
    """Interface for the chat-completion endpoint that decides on tool calls."""

    @abstractmethod
    async def complete(
        self,
        conversation: ConversationLog,
        tools: Optional[list[dict]] = None,
    ) -> AssistantMessage:
        """Send the conversation (and optional function declarations) to the model."""
        pass
