"""Registry of callable tools advertised to the completion model."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ragcall.domain.entities import ToolDeclaration
from ragcall.domain.exceptions import InvalidConfiguration, InvalidInput, NotFound

logger = logging.getLogger(__name__)

ToolImplementation = Callable[..., Any]


@dataclass(frozen=True)
class RegisteredTool:
    """Declaration paired with its implementation."""

    declaration: ToolDeclaration
    implementation: ToolImplementation


class ToolRegistry:
    """Maps tool names to implementations and their declarations.

    Populated once at startup and read-only afterwards. Declarations are
    returned in registration order.
    """

    def __init__(self) -> None:
        self._tools: dict[str, RegisteredTool] = {}

    def register(self, declaration: ToolDeclaration, implementation: ToolImplementation) -> None:
        """Register a tool.

        Args:
            declaration: Name, description and parameters model.
            implementation: Sync or async callable receiving validated keyword arguments.

        Raises:
            InvalidConfiguration: If the name is taken or the declaration is malformed.
        """
        if not declaration.name:
            raise InvalidConfiguration("Tool name must not be empty")
        if declaration.name in self._tools:
            raise InvalidConfiguration(f"Tool '{declaration.name}' is already registered")
        if not (isinstance(declaration.parameters, type) and issubclass(declaration.parameters, BaseModel)):
            raise InvalidConfiguration(f"Tool '{declaration.name}' parameters must be a pydantic model")
        if not callable(implementation):
            raise InvalidConfiguration(f"Tool '{declaration.name}' implementation is not callable")
        self._tools[declaration.name] = RegisteredTool(declaration, implementation)
        logger.info("Registered tool %s", declaration.name)

    def resolve(self, name: str) -> ToolImplementation:
        """Return the implementation registered under ``name``."""
        return self._get(name).implementation

    def declaration(self, name: str) -> ToolDeclaration:
        return self._get(name).declaration

    def declarations(self) -> list[ToolDeclaration]:
        return [t.declaration for t in self._tools.values()]

    def validate_arguments(self, name: str, arguments: dict[str, Any]) -> BaseModel:
        """Validate arguments against the tool's parameters model."""
        model = self._get(name).declaration.parameters
        try:
            return model.model_validate(arguments)
        except PydanticValidationError as e:
            raise InvalidInput(f"Invalid arguments for {name}: {e}") from e

    def _get(self, name: str) -> RegisteredTool:
        tool = self._tools.get(name)
        if tool is None:
            raise NotFound(f"Tool '{name}' is not registered")
        return tool

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
