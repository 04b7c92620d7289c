import httpx
from fastapi import Depends, Request

from sar_lookup.config import Settings, get_settings
from sar_lookup.services.sar_orchestrator import SarLookupOrchestrator


async def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


async def get_orchestrator(
    http_client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> SarLookupOrchestrator:
    return SarLookupOrchestrator(http_client, settings)
