"""Built-in tools: weather, distance and document search."""

import math
from typing import Literal

from pydantic import BaseModel, Field

from ragcall.application.ports import EmbeddingProvider, VectorIndex
from ragcall.application.tools.registry import ToolRegistry
from ragcall.domain.entities import ToolDeclaration
from ragcall.domain.exceptions import NotFound

# city -> (latitude, longitude)
CITY_COORDINATES: dict[str, tuple[float, float]] = {
    "tokyo": (35.6762, 139.6503),
    "paris": (48.8566, 2.3522),
    "london": (51.5074, -0.1278),
    "new york": (40.7128, -74.0060),
    "san francisco": (37.7749, -122.4194),
    "berlin": (52.5200, 13.4050),
    "sydney": (-33.8688, 151.2093),
}

# city -> (temperature in celsius, conditions)
CITY_WEATHER: dict[str, tuple[float, str]] = {
    "tokyo": (10.0, "clear"),
    "paris": (22.0, "partly cloudy"),
    "london": (14.0, "light rain"),
    "new york": (18.0, "sunny"),
    "san francisco": (16.0, "fog"),
    "berlin": (12.0, "overcast"),
    "sydney": (24.0, "sunny"),
}

EARTH_RADIUS_KM = 6371.0
KM_PER_MILE = 1.609344


def _city_key(location: str) -> str:
    """'Tokyo, Japan' -> 'tokyo'."""
    return location.split(",")[0].strip().lower()


class WeatherArguments(BaseModel):
    location: str = Field(description="City name, e.g. 'Tokyo' or 'Paris, France'")
    unit: Literal["celsius", "fahrenheit"] = "celsius"


class DistanceArguments(BaseModel):
    origin: str = Field(description="City to measure from")
    destination: str = Field(description="City to measure to")
    unit: Literal["km", "miles"] = "km"


class SearchDocumentsArguments(BaseModel):
    query: str = Field(description="What to look for in the ingested documents")
    k: int = Field(default=3, ge=1, le=10, description="Number of passages to return")


def get_current_weather(location: str, unit: str = "celsius") -> dict[str, object]:
    """Current weather for a known city."""
    key = _city_key(location)
    if key not in CITY_WEATHER:
        raise NotFound(f"No weather data for {location}")
    celsius, conditions = CITY_WEATHER[key]
    temperature = celsius if unit == "celsius" else round(celsius * 9 / 5 + 32, 1)
    return {
        "location": location,
        "temperature": temperature,
        "unit": unit,
        "conditions": conditions,
    }


def get_distance(origin: str, destination: str, unit: str = "km") -> dict[str, object]:
    """Great-circle distance between two known cities."""
    coords = []
    for city in (origin, destination):
        key = _city_key(city)
        if key not in CITY_COORDINATES:
            raise NotFound(f"Unknown city: {city}")
        coords.append(CITY_COORDINATES[key])
    (lat1, lon1), (lat2, lon2) = coords
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    km = 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))
    distance = km if unit == "km" else km / KM_PER_MILE
    return {
        "origin": origin,
        "destination": destination,
        "distance": round(distance, 1),
        "unit": unit,
    }


class DocumentSearchTool:
    """Search the vector index from inside a tool-calling conversation."""

    def __init__(self, embedding_provider: EmbeddingProvider, vector_index: VectorIndex) -> None:
        self._embedding_provider = embedding_provider
        self._vector_index = vector_index

    async def __call__(self, query: str, k: int = 3) -> list[dict[str, object]]:
        vector = await self._embedding_provider.embed(query)
        results = await self._vector_index.query(vector, k)
        return [
            {
                "source": r.chunk.source_ref,
                "text": r.chunk.text,
                "score": round(r.score, 4),
            }
            for r in results
        ]


WEATHER_DECLARATION = ToolDeclaration(
    name="get_current_weather",
    description="Get the current weather in a given city",
    parameters=WeatherArguments,
)

DISTANCE_DECLARATION = ToolDeclaration(
    name="get_distance",
    description="Get the straight-line distance between two cities",
    parameters=DistanceArguments,
)

SEARCH_DECLARATION = ToolDeclaration(
    name="search_documents",
    description="Search ingested documents and return the most relevant passages with their sources",
    parameters=SearchDocumentsArguments,
)


def register_builtin_tools(
    registry: ToolRegistry,
    embedding_provider: EmbeddingProvider | None = None,
    vector_index: VectorIndex | None = None,
) -> ToolRegistry:
    """Register weather and distance tools, and document search when an index is given."""
    registry.register(WEATHER_DECLARATION, get_current_weather)
    registry.register(DISTANCE_DECLARATION, get_distance)
    if embedding_provider is not None and vector_index is not None:
        registry.register(SEARCH_DECLARATION, DocumentSearchTool(embedding_provider, vector_index))
    return registry
