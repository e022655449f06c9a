class DomainError(Exception):
    """Base exception for all domain-level errors."""

    pass


class ConfigurationError(DomainError):
    """Raised when required settings (credentials, endpoint) are missing."""

    pass


class ServerConnectionError(DomainError):
    """Raised when the tool server cannot be launched or discovered."""

    pass


class UnsupportedServerScriptError(ServerConnectionError):
    """Raised when a server script has no known interpreter."""

    pass


class ReasoningServiceError(DomainError):
    """Raised when the chat-completion endpoint fails or answers malformed."""

    pass


class ConversationError(DomainError):
    """Base exception for conversation log violations."""

    pass


class UnmatchedToolResultError(ConversationError):
    """Raised when a tool result does not answer a pending tool call."""

    pass


class UnansweredToolCallError(ConversationError):
    """Raised when a conversation still has tool calls without results."""

    pass


class UnknownToolError(DomainError):
    """Raised by the tool server when asked for a tool it does not declare."""

    pass


class InvalidToolArgumentsError(DomainError):
    """Raised by the tool server when arguments do not match the tool schema."""

    pass
