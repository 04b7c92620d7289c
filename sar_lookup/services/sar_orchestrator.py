"""
SAR lookup orchestration.

One request runs a single linear chain:

    validate -> check credentials -> catalog search -> select latest image
      -> Imagga colors -> Imagga tags -> build prompt -> LLM -> assemble

Only the first three stages can end the request with a non-200 status.
The outbound calls are awaited one after another; nothing is shared
between requests apart from the injected settings and HTTP client.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from sar_lookup.config import Settings
from sar_lookup.core.exceptions import ConfigError, ValidationError
from sar_lookup.schemas.sar_schema import SarImageRequest, SarImageResponse
from sar_lookup.services.catalog_client import (
    AsfCatalogClient,
    build_scene_metadata,
    select_latest_feature,
)
from sar_lookup.services.imagga_client import ImaggaClient
from sar_lookup.services.llm_client import LLMClient
from sar_lookup.services.prompt_builder import build_prompt

logger = logging.getLogger(__name__)


def validate_request(request: Optional[SarImageRequest]) -> SarImageRequest:
    """Both coordinates must be present; their values are not checked."""
    if request is None or not request.has_coordinates():
        raise ValidationError()
    return request


def check_credentials(settings: Settings) -> None:
    """Imagga credentials are mandatory; a missing LLM key only warns."""
    if not settings.imagga_configured:
        logger.error("Imagga API Key or Secret missing")
        raise ConfigError()
    if not settings.OPEN_ROUTER_API:
        logger.warning(
            "OPEN_ROUTER_API not set - AI call will fail unless provided as env var."
        )


def assemble_response(
    image_url: str,
    explanation: str,
    properties: Dict[str, Any],
    image_tags: List[str],
    image_colors: List[Dict[str, Any]],
    metadata: Dict[str, Any],
) -> SarImageResponse:
    """Build the response; ``sceneName`` is only set when the feature carries one."""
    fields: Dict[str, Any] = dict(
        image_url=image_url,
        explanation=explanation,
        image_tags=image_tags,
        image_colors=image_colors,
        metadata=metadata,
    )
    if "sceneName" in properties:
        fields["scene_name"] = properties["sceneName"]
    return SarImageResponse(**fields)


class SarLookupOrchestrator:
    """
    Runs one SAR lookup per call to :meth:`lookup`.

    Usage:
        orchestrator = SarLookupOrchestrator(http_client, settings)
        response = await orchestrator.lookup(request)
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: Settings,
        catalog: Optional[AsfCatalogClient] = None,
        imagga: Optional[ImaggaClient] = None,
        llm: Optional[LLMClient] = None,
    ):
        self.settings = settings
        self.catalog = catalog or AsfCatalogClient(http_client, settings)
        self.imagga = imagga or ImaggaClient(http_client, settings)
        self.llm = llm or LLMClient(http_client, settings)

    async def lookup(self, request: Optional[SarImageRequest]) -> SarImageResponse:
        """
        Resolve the latest SAR preview for a point and interpret it.

        Raises:
            ValidationError: latitude or longitude missing
            ConfigError: Imagga credentials not configured
            UpstreamError: the catalog call failed
            NotFoundError: no features, or no feature with a preview
        """
        latitude = request.latitude if request is not None else None
        longitude = request.longitude if request is not None else None
        logger.info(f"Received coordinates: Lat={latitude}, Lon={longitude}")

        validate_request(request)
        check_credentials(self.settings)

        features = await self.catalog.search(latitude, longitude)
        feature = select_latest_feature(features)
        properties = feature["properties"]
        image_url = properties["browse"][0]
        logger.info(f"Found latest image URL: {image_url}")

        colors = await self.imagga.get_colors(image_url)
        tags = await self.imagga.get_tags(image_url)

        metadata = build_scene_metadata(properties, latitude, longitude).to_payload()
        prompt = build_prompt(colors.value, tags.value, metadata)

        interpretation = await self.llm.interpret(prompt)

        return assemble_response(
            image_url=image_url,
            explanation=interpretation.value,
            properties=properties,
            image_tags=tags.value,
            image_colors=colors.value,
            metadata=metadata,
        )
