"""Minimal MCP demo: a weather tool server and an LLM-driven MCP client."""

__version__ = "1.0.0"
