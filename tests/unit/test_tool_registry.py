"""Unit tests for ToolRegistry and ToolDeclaration."""

import pytest
from pydantic import BaseModel

from ragcall.application.tools.registry import ToolRegistry
from ragcall.domain.entities import ToolCallRequest, ToolDeclaration
from ragcall.domain.exceptions import InvalidConfiguration, InvalidInput, NotFound
from ragcall.infrastructure.tools.builtin_tools import (
    DISTANCE_DECLARATION,
    WEATHER_DECLARATION,
    WeatherArguments,
    get_current_weather,
)


class EchoArguments(BaseModel):
    text: str


def echo(text: str) -> str:
    return text


class TestToolRegistry:
    def test_declarations_keep_registration_order(self) -> None:
        registry = ToolRegistry()
        registry.register(DISTANCE_DECLARATION, lambda **_: None)
        registry.register(WEATHER_DECLARATION, get_current_weather)
        assert [d.name for d in registry.declarations()] == ["get_distance", "get_current_weather"]
        assert len(registry) == 2
        assert "get_current_weather" in registry

    def test_resolve_returns_implementation(self) -> None:
        registry = ToolRegistry()
        registry.register(WEATHER_DECLARATION, get_current_weather)
        assert registry.resolve("get_current_weather") is get_current_weather
        assert registry.declaration("get_current_weather") is WEATHER_DECLARATION

    def test_resolve_unknown_raises_not_found(self) -> None:
        with pytest.raises(NotFound):
            ToolRegistry().resolve("launch_rocket")

    def test_duplicate_name_rejected(self) -> None:
        registry = ToolRegistry()
        registry.register(WEATHER_DECLARATION, get_current_weather)
        with pytest.raises(InvalidConfiguration):
            registry.register(WEATHER_DECLARATION, get_current_weather)

    @pytest.mark.parametrize(
        "declaration,implementation",
        [
            (ToolDeclaration(name="", description="x", parameters=EchoArguments), echo),
            (ToolDeclaration(name="echo", description="x", parameters=dict), echo),
            (ToolDeclaration(name="echo", description="x", parameters=EchoArguments), "not callable"),
        ],
    )
    def test_malformed_registration_rejected(self, declaration, implementation) -> None:
        with pytest.raises(InvalidConfiguration):
            ToolRegistry().register(declaration, implementation)

    def test_validate_arguments(self) -> None:
        registry = ToolRegistry()
        registry.register(WEATHER_DECLARATION, get_current_weather)
        args = registry.validate_arguments("get_current_weather", {"location": "Tokyo"})
        assert isinstance(args, WeatherArguments)
        assert args.unit == "celsius"
        with pytest.raises(InvalidInput):
            registry.validate_arguments("get_current_weather", {"unit": "kelvin"})


class TestToolDeclaration:
    def test_openai_tool_shape(self) -> None:
        tool = WEATHER_DECLARATION.to_openai_tool()
        assert tool["type"] == "function"
        function = tool["function"]
        assert function["name"] == "get_current_weather"
        assert function["description"]
        params = function["parameters"]
        assert params["type"] == "object"
        assert params["required"] == ["location"]
        assert params["properties"]["unit"]["enum"] == ["celsius", "fahrenheit"]
        assert "title" not in params


class TestToolCallRequest:
    def test_parses_json_object(self) -> None:
        request = ToolCallRequest("call_1", "get_current_weather", '{"location": "Tokyo"}')
        assert request.arguments() == {"location": "Tokyo"}

    def test_empty_arguments(self) -> None:
        assert ToolCallRequest("call_1", "noop", "").arguments() == {}

    @pytest.mark.parametrize("raw", ['{"location": ', '["Tokyo"]', "42"])
    def test_rejects_malformed_arguments(self, raw: str) -> None:
        with pytest.raises(InvalidInput):
            ToolCallRequest("call_1", "get_current_weather", raw).arguments()
