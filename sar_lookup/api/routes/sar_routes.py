"""
FastAPI routes for the SAR lookup endpoint.

Endpoints:
    POST /api/get-sar-image - Latest SAR preview for a point, with AI interpretation
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from sar_lookup.api.deps import get_orchestrator
from sar_lookup.core.exceptions import SarLookupError, UpstreamError
from sar_lookup.schemas.sar_schema import ErrorResponse, SarImageRequest, SarImageResponse
from sar_lookup.services.sar_orchestrator import SarLookupOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["sar"])


@router.post(
    "/get-sar-image",
    response_model=SarImageResponse,
    response_model_exclude_unset=True,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def get_sar_image(
    req: Optional[SarImageRequest] = None,
    orchestrator: SarLookupOrchestrator = Depends(get_orchestrator),
):
    """
    Find the most recent Sentinel-1 preview covering the coordinates,
    enrich it with Imagga colors/tags and an LLM interpretation.
    """
    try:
        return await orchestrator.lookup(req)
    except SarLookupError:
        raise
    except Exception as e:
        logger.error(f"Error processing SAR request: {e}", exc_info=True)
        raise UpstreamError() from e
