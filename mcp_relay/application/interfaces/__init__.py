from .i_mcp_client import IMCPClient
from .i_reasoning_service import IReasoningService

__all__ = [
    "IMCPClient",
    "IReasoningService",
]
