"""
Command line entry point.

Connects to the MCP server script given as the only argument and starts the
interactive query loop.
"""

import asyncio
import logging
import sys
from typing import Optional

import click

from mcp_relay.application.use_cases.process_query import ProcessQueryUseCase
from mcp_relay.domain.exceptions.domain_exceptions import (
    ConfigurationError,
    ServerConnectionError,
)
from mcp_relay.infrastructure.config.settings import Settings, get_settings
from mcp_relay.infrastructure.llm.openai_reasoning import OpenAIReasoningService
from mcp_relay.infrastructure.mcp.client.mcp_client import MCPClient
from mcp_relay.presentation.cli.chat_loop import ChatLoop

logger = logging.getLogger(__name__)


async def run_session(settings: Settings, server_script: str) -> None:
    """Connect, run the read loop and always release the server."""
    client = MCPClient(
        client_name=settings.mcp_client_name,
        client_version=settings.mcp_client_version,
    )
    reasoning_service = OpenAIReasoningService(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        model_name=settings.openai_model,
    )

    try:
        await client.connect(server_script)
        click.echo(f"Connected to server with tools: {client.tool_names}")

        use_case = ProcessQueryUseCase(
            mcp_client=client,
            reasoning_service=reasoning_service,
        )
        await ChatLoop(use_case).run()
    finally:
        await client.close()


@click.command()
@click.argument("server_script", required=False)
@click.pass_context
def cli(ctx: click.Context, server_script: Optional[str]) -> None:
    """Chat with an LLM that can call the tools of an MCP server.

    SERVER_SCRIPT is the path to a .py or .js MCP server script.
    """
    if not server_script:
        click.echo(ctx.get_usage())
        return

    try:
        settings = get_settings()
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        asyncio.run(run_session(settings, server_script))
    except ServerConnectionError as e:
        logger.error("Connection failed: %s", e)
        click.echo(f"Could not connect to MCP server: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Session stopped by user")


if __name__ == "__main__":
    cli()
