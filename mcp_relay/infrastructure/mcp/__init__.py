# MCP (Model Context Protocol) Infrastructure
#
# This module provides:
# - An MCP Server exposing the demo weather and match result tools
# - An MCP Client that launches a server script and calls its tools
#
# Protocol framing and request correlation are handled by the MCP SDK.
