from .domain_exceptions import (
    DomainError,
    ConfigurationError,
    ServerConnectionError,
    UnsupportedServerScriptError,
    ReasoningServiceError,
    ConversationError,
    UnmatchedToolResultError,
    UnansweredToolCallError,
    UnknownToolError,
    InvalidToolArgumentsError,
)

__all__ = [
    "DomainError",
    "ConfigurationError",
    "ServerConnectionError",
    "UnsupportedServerScriptError",
    "ReasoningServiceError",
    "ConversationError",
    "UnmatchedToolResultError",
    "UnansweredToolCallError",
    "UnknownToolError",
    "InvalidToolArgumentsError",
]
