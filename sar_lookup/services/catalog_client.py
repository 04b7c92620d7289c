"""
Client for the ASF (Alaska Satellite Facility) SAR catalog search API.

The catalog is queried for acquisitions intersecting a single point and
returns GeoJSON features. This module also holds the selection logic that
picks the most recent acquisition carrying a browse (preview) image.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import httpx

from sar_lookup.config import Settings
from sar_lookup.core.exceptions import NO_PREVIEWS, NotFoundError, UpstreamError
from sar_lookup.schemas.sar_schema import Coordinates, SceneMetadata

logger = logging.getLogger(__name__)

# Catalog property -> SceneMetadata field
METADATA_FIELDS = (
    ("sceneName", "scene_name"),
    ("platform", "platform"),
    ("startTime", "capture_date"),
    ("flightDirection", "flight_direction"),
    ("polarization", "polarization"),
    ("beamModeType", "beam_mode"),
    ("orbit", "orbit"),
)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class AsfCatalogClient:
    """Point-intersection search against the ASF catalog.

    Usage:
        client = AsfCatalogClient(http_client, settings)
        features = await client.search(latitude, longitude)
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings):
        self.http_client = http_client
        self.search_url = settings.ASF_SEARCH_URL
        self.dataset = settings.ASF_DATASET
        self.max_results = settings.ASF_MAX_RESULTS
        self.timeout = settings.ASF_TIMEOUT

    def build_params(self, latitude: Any, longitude: Any) -> Dict[str, Any]:
        """Query parameters for a point search; coordinates are not coerced."""
        return {
            "intersectsWith": f"POINT({longitude} {latitude})",
            "dataset": self.dataset,
            "maxResults": self.max_results,
            "output": "geojson",
        }

    async def search(self, latitude: Any, longitude: Any) -> List[Dict[str, Any]]:
        """
        Return the catalog's GeoJSON features for the point.

        Raises:
            UpstreamError: If the request fails or the body is not JSON.
        """
        try:
            response = await self.http_client.get(
                self.search_url,
                params=self.build_params(latitude, longitude),
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"ASF catalog returned {e.response.status_code}: {e.response.text[:500]}"
            )
            raise UpstreamError() from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"ASF catalog request failed: {e}")
            raise UpstreamError() from e

        features = data.get("features") if isinstance(data, dict) else None
        return features or []


def parse_start_time(value: Any) -> Optional[datetime]:
    """Parse a catalog ISO-8601 timestamp; naive values are taken as UTC."""
    if not isinstance(value, str) or not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def has_preview(feature: Any) -> bool:
    if not isinstance(feature, dict):
        return False
    properties = feature.get("properties")
    if not isinstance(properties, dict):
        return False
    browse = properties.get("browse")
    return isinstance(browse, list) and len(browse) > 0


def _recency_key(feature: Dict[str, Any]) -> Tuple[int, datetime]:
    parsed = parse_start_time(feature["properties"].get("startTime"))
    if parsed is None:
        return (0, _OLDEST)
    return (1, parsed)


def select_latest_feature(features: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Pick the most recent feature that carries at least one browse image.

    Features are sorted by start time, newest first; the sort is stable so
    equal start times keep catalog order. Missing or unparseable start times
    sort after every valid one.

    Raises:
        NotFoundError: If there are no features, or none has a preview.
    """
    if not features:
        raise NotFoundError()

    eligible = [f for f in features if has_preview(f)]
    if not eligible:
        raise NotFoundError(NO_PREVIEWS)

    return sorted(eligible, key=_recency_key, reverse=True)[0]


def build_scene_metadata(
    properties: Dict[str, Any],
    latitude: Any,
    longitude: Any
) -> SceneMetadata:
    """Project catalog properties onto the metadata bundle used for the prompt."""
    fields = {
        field: properties[prop]
        for prop, field in METADATA_FIELDS
        if prop in properties
    }
    return SceneMetadata(
        **fields,
        coordinates=Coordinates(latitude=latitude, longitude=longitude),
    )
