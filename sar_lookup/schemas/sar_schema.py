from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


T = TypeVar("T")


class SarImageRequest(BaseModel):
    """Request model for the SAR lookup endpoint.

    Coordinates are accepted as any JSON value and are passed through to
    the catalog verbatim. Presence is checked by the orchestrator, not by
    pydantic, so a missing key yields the endpoint's own 400 payload.
    """
    model_config = ConfigDict(extra="allow")

    latitude: Any = None
    longitude: Any = None

    def has_coordinates(self) -> bool:
        return {"latitude", "longitude"} <= self.model_fields_set


class Coordinates(BaseModel):
    latitude: Any
    longitude: Any


class SceneMetadata(BaseModel):
    """Scene metadata bundle embedded in the prompt and echoed back.

    Fields whose catalog property is absent are left unset and dropped on
    serialization; ``coordinates`` is always present.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    scene_name: Any = None
    platform: Any = None
    capture_date: Any = None
    flight_direction: Any = None
    polarization: Any = None
    beam_mode: Any = None
    orbit: Any = None
    coordinates: Coordinates

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


class SarImageResponse(BaseModel):
    """Response model for POST /api/get-sar-image."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    image_url: str
    explanation: str
    scene_name: Optional[Any] = Field(
        default=None,
        description="Omitted from the response when the catalog feature has none"
    )
    image_tags: List[str] = Field(default_factory=list)
    image_colors: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Color entries exactly as returned by the vision API"
    )
    metadata: Dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: int = Field(..., description="Epoch milliseconds")


@dataclass(frozen=True)
class EnrichmentResult(Generic[T]):
    """Outcome of an outbound call whose failure must not abort the request.

    ``degraded`` is set when ``value`` is the fallback default rather than
    data from the upstream service.
    """
    value: T
    degraded: bool = False
    error: Optional[str] = None

    @classmethod
    def ok(cls, value: T) -> "EnrichmentResult[T]":
        return cls(value=value)

    @classmethod
    def fallback(cls, value: T, error: str) -> "EnrichmentResult[T]":
        return cls(value=value, degraded=True, error=error)
