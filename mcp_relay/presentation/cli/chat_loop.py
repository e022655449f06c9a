"""
Interactive read loop.

Reads one query per line, answers it through the query use case and prints
the response. Typing ``quit`` (any case) or sending EOF ends the session.
"""

import asyncio
import logging
from typing import Callable

import click

from mcp_relay.application.use_cases.process_query import ProcessQueryUseCase

logger = logging.getLogger(__name__)

QUIT_COMMAND = "quit"


class ChatLoop:
    """Runs queries typed by the user until they quit."""

    def __init__(
        self,
        use_case: ProcessQueryUseCase,
        read_line: Callable[[str], str] = input,
        write: Callable[[str], None] = click.echo,
    ):
        self.use_case = use_case
        self.read_line = read_line
        self.write = write

    async def run(self) -> None:
        self.write("\nMCP client started!")
        self.write(f"Type your query or '{QUIT_COMMAND}' to exit.")

        while True:
            try:
                line = await asyncio.to_thread(self.read_line, "\nQuery: ")
            except EOFError:
                break

            if line.lower() == QUIT_COMMAND:
                break

            await self.handle(line)

    async def handle(self, query: str) -> None:
        """Answer one query; failures are reported and do not end the loop."""
        try:
            response = await self.use_case.execute(query)
        except Exception as e:
            logger.exception("Query failed: %s", query)
            self.write(f"\nError: {e}")
            return

        self.write(f"\nResponse: {response.answer}")
