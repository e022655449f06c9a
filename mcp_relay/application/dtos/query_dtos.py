import json
from pydantic import BaseModel, Field
from typing import Any, List


class ToolCallTrace(BaseModel):
    """Record of one tool call made while answering a query."""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    result: str = ""
    is_error: bool = False

    def render(self) -> str:
        arguments = json.dumps(self.arguments, ensure_ascii=False)
        header = f"[Called tool {self.name} with arguments {arguments}]"
        if self.is_error:
            header += " (failed)"
        return f"{header}\n{self.result}" if self.result else header


class QueryResponse(BaseModel):
    """Response DTO for one processed query."""

    answer: str
    tool_calls: List[ToolCallTrace] = Field(default_factory=list)
    reasoning_calls: int = 1

    class Config:
        json_schema_extra = {
            "example": {
                "answer": "[Called tool getWeather with arguments {\"city\": \"Paris\"}]\n"
                "It is sunny in Paris today...\n\nThe weather in Paris is great.",
                "tool_calls": [
                    {
                        "name": "getWeather",
                        "arguments": {"city": "Paris"},
                        "result": "It is sunny in Paris today...",
                        "is_error": False,
                    }
                ],
                "reasoning_calls": 2,
            }
        }
