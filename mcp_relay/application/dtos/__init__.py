from .query_dtos import QueryResponse, ToolCallTrace

__all__ = [
    "QueryResponse",
    "ToolCallTrace",
]
