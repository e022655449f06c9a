import logging
from dataclasses import dataclass

from mcp_relay.domain.entities.conversation import AssistantMessage, ConversationLog
from mcp_relay.application.dtos.query_dtos import QueryResponse, ToolCallTrace
from mcp_relay.application.interfaces.i_mcp_client import IMCPClient
from mcp_relay.application.interfaces.i_reasoning_service import IReasoningService
from mcp_relay.application.mappers.tool_declarations import to_function_declarations

logger = logging.getLogger(__name__)

FALLBACK_ANSWER = "Sorry, I did not understand your question."


@dataclass
class ProcessQueryUseCase:
    """Use case for answering one user query with the server's tools."""

    mcp_client: IMCPClient
    reasoning_service: IReasoningService

    async def execute(self, query: str) -> QueryResponse:
        """Answer a query in at most two reasoning round trips.

        1. Send the query with the tool catalog
        2. If no tools were requested, return the text
        3. Run each requested tool in order, recording its result
        4. Ask the model for a final answer over the tool results
        """
        conversation = ConversationLog()
        conversation.add_user(query)
        declarations = to_function_declarations(self.mcp_client.tools)

        first = await self.reasoning_service.complete(
            conversation, tools=declarations or None
        )
        if not first.has_tool_calls:
            return QueryResponse(answer=first.content or FALLBACK_ANSWER)

        traces: list[ToolCallTrace] = []
        for call in first.tool_calls:
            logger.info("Model requested tool %s with %s", call.name, call.arguments)

            conversation.add_assistant(AssistantMessage(tool_calls=(call,)))
            result = await self.mcp_client.call_tool(call)
            conversation.add_tool_result(call.id, result.content)

            if result.is_error:
                logger.warning("Tool %s returned an error: %s", call.name, result.content)

            traces.append(
                ToolCallTrace(
                    name=call.name,
                    arguments=call.arguments,
                    result=result.content,
                    is_error=result.is_error,
                )
            )

        conversation.assert_complete()
        final = await self.reasoning_service.complete(conversation)
        logger.debug("Final model answer: %s", final.content)

        sections = [trace.render() for trace in traces]
        sections.append(final.content or "")

        return QueryResponse(
            answer="\n\n".join(sections),
            tool_calls=traces,
            reasoning_calls=2,
        )
