"""Tool declaration and tool-call request."""

import json
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from ragcall.domain.exceptions import InvalidInput


@dataclass(frozen=True)
class ToolDeclaration:
    """Function advertised to the completion model."""

    name: str
    description: str
    parameters: type[BaseModel]

    @property
    def parameter_schema(self) -> dict[str, Any]:
        """JSON schema of the parameters model."""
        schema = self.parameters.model_json_schema()
        schema.pop("title", None)
        return schema

    def to_openai_tool(self) -> dict[str, Any]:
        """Render as a chat-completions ``tools`` entry."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameter_schema,
            },
        }


@dataclass(frozen=True)
class ToolCallRequest:
    """Tool invocation requested by the model."""

    id: str
    function_name: str
    raw_arguments: str = "{}"

    def arguments(self) -> dict[str, Any]:
        """Parse raw JSON arguments into a mapping."""
        raw = self.raw_arguments.strip() if self.raw_arguments else ""
        if not raw:
            return {}
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            raise InvalidInput(f"Arguments for {self.function_name} are not valid JSON: {e}") from e
        if not isinstance(parsed, dict):
            raise InvalidInput(f"Arguments for {self.function_name} must be a JSON object")
        return parsed
