from .chat_loop import ChatLoop
from .main import cli

__all__ = [
    "ChatLoop",
    "cli",
]
