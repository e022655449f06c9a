from dataclasses import dataclass
from typing import Iterator, Optional, Union

from .tool import ToolInvocationRequest
from ..exceptions.domain_exceptions import (
    ConversationError,
    UnansweredToolCallError,
    UnmatchedToolResultError,
)


@dataclass(frozen=True)
class UserMessage:
    content: str


@dataclass(frozen=True)
class AssistantMessage:
    """Assistant turn, optionally carrying requested tool calls."""

    content: Optional[str] = None
    tool_calls: tuple[ToolInvocationRequest, ...] = ()

    @property
    def has_tool_calls(self) -> bool:
        return len(self.tool_calls) > 0


@dataclass(frozen=True)
class ToolResultMessage:
    tool_call_id: str
    content: str


ConversationMessage = Union[UserMessage, AssistantMessage, ToolResultMessage]


class ConversationLog:
    """Append-only, ordered message log for a single query.

    Every tool result must answer exactly one earlier tool call that has
    not been answered yet. Messages cannot be removed or reordered.
    """

    def __init__(self) -> None:
        self._messages: list[ConversationMessage] = []
        self._pending: dict[str, ToolInvocationRequest] = {}

    def add_user(self, content: str) -> UserMessage:
        message = UserMessage(content=content)
        self._messages.append(message)
        return message

    def add_assistant(self, message: AssistantMessage) -> AssistantMessage:
        for call in message.tool_calls:
            if call.id in self._pending:
                raise ConversationError(
                    f"Tool call id {call.id} is already awaiting a result"
                )
            self._pending[call.id] = call
        self._messages.append(message)
        return message

    def add_tool_result(self, tool_call_id: str, content: str) -> ToolResultMessage:
        if tool_call_id not in self._pending:
            raise UnmatchedToolResultError(
                f"No pending tool call with id {tool_call_id}"
            )
        del self._pending[tool_call_id]
        message = ToolResultMessage(tool_call_id=tool_call_id, content=content)
        self._messages.append(message)
        return message

    @property
    def pending_calls(self) -> list[ToolInvocationRequest]:
        return list(self._pending.values())

    @property
    def messages(self) -> tuple[ConversationMessage, ...]:
        return tuple(self._messages)

    def assert_complete(self) -> None:
        """Raise if any tool call is still waiting for its result."""
        if self._pending:
            ids = ", ".join(self._pending)
            raise UnansweredToolCallError(f"Unanswered tool calls: {ids}")

    def __iter__(self) -> Iterator[ConversationMessage]:
        return iter(tuple(self._messages))

    def __len__(self) -> int:
        return len(self._messages)
