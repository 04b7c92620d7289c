"""
HTTP client for the Imagga image-analysis API (colors and tags).

Both calls are enrichment only: any failure is logged and turned into a
degraded ``EnrichmentResult`` carrying an empty list, so a flaky vision
service never fails the SAR lookup.
"""

import logging
from typing import Any, Dict, List

import httpx

from sar_lookup.config import Settings
from sar_lookup.schemas.sar_schema import EnrichmentResult

logger = logging.getLogger(__name__)

# Tags at or below this confidence are discarded
TAG_CONFIDENCE_THRESHOLD = 15
MAX_TAGS = 5


def _describe_error(error: Exception) -> str:
    """Prefer the upstream error body when the service answered at all."""
    if isinstance(error, httpx.HTTPStatusError):
        return f"{error.response.status_code} {error.response.text[:500]}"
    return str(error) or error.__class__.__name__


def extract_colors(data: Any) -> List[Dict[str, Any]]:
    """
    Pull ``result.colors.image_colors`` out of a colors response.

    Raises:
        ValueError: If any color entry is not an object.
    """
    try:
        colors = data["result"]["colors"]["image_colors"]
    except (KeyError, TypeError):
        return []
    if not isinstance(colors, list):
        return []
    if not all(isinstance(c, dict) for c in colors):
        raise ValueError("Malformed color entry in Imagga response")
    return list(colors)


def extract_tags(data: Any) -> List[str]:
    """
    Keep tags with confidence above the threshold, capped to the first
    ``MAX_TAGS`` survivors in upstream order, as English labels.

    Raises:
        ValueError: If a kept tag entry has no string label.
    """
    try:
        tags = data["result"]["tags"]
    except (KeyError, TypeError):
        return []
    if not tags:
        return []

    survivors = [t for t in tags if _confidence(t) > TAG_CONFIDENCE_THRESHOLD]
    labels = [_label(t) for t in survivors[:MAX_TAGS]]
    if not all(isinstance(label, str) for label in labels):
        raise ValueError("Malformed tag entry in Imagga response")
    return labels


def _label(tag: Dict[str, Any]) -> Any:
    names = tag.get("tag")
    return names.get("en") if isinstance(names, dict) else None


def _confidence(tag: Any) -> float:
    # Numeric strings count; anything else never passes the threshold
    value = tag.get("confidence") if isinstance(tag, dict) else None
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


class ImaggaClient:
    """
    Imagga v2 client authenticated with HTTP basic auth.

    Usage:
        client = ImaggaClient(http_client, settings)
        colors = await client.get_colors(image_url)
        tags = await client.get_tags(image_url)
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings):
        self.http_client = http_client
        self.base_url = settings.IMAGGA_BASE_URL.rstrip("/")
        self.auth = httpx.BasicAuth(
            settings.IMAGGA_API_KEY or "",
            settings.IMAGGA_API_SECRET or "",
        )
        self.timeout = settings.IMAGGA_TIMEOUT

    async def _get(self, endpoint: str, image_url: str) -> Any:
        response = await self.http_client.get(
            f"{self.base_url}/{endpoint}",
            params={"image_url": image_url},
            auth=self.auth,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    async def get_colors(self, image_url: str) -> EnrichmentResult[List[Dict[str, Any]]]:
        """Color palette with area percentages; ``[]`` on any failure."""
        try:
            colors = extract_colors(await self._get("colors", image_url))
        except Exception as e:
            error = _describe_error(e)
            logger.warning(f"Imagga colors call failed: {error}")
            return EnrichmentResult.fallback([], error)

        logger.info(f"Imagga colors received: {colors[:5]}")
        return EnrichmentResult.ok(colors)

    async def get_tags(self, image_url: str) -> EnrichmentResult[List[str]]:
        """Filtered tag labels; ``[]`` on any failure."""
        try:
            tags = extract_tags(await self._get("tags", image_url))
        except Exception as e:
            error = _describe_error(e)
            logger.warning(f"Imagga tags call failed: {error}")
            return EnrichmentResult.fallback([], error)

        logger.info(f"Imagga tags: {tags}")
        return EnrichmentResult.ok(tags)
