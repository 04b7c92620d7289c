"""
Shared pytest fixtures and configuration for SAR Lookup API tests.

This module provides:
- Explicit test settings (no environment mutation needed)
- A fake upstream (ASF catalog, Imagga, LLM) served through httpx.MockTransport
- FastAPI test client wired to both
"""

from typing import Any, AsyncIterator, Callable, Dict, Generator, List, Union

import httpx
import pytest
from fastapi.testclient import TestClient

from fixtures.test_data import (
    generate_catalog_response,
    generate_chat_completion,
    generate_colors_response,
    generate_tags_response,
)
from sar_lookup.config import Settings, get_settings
from sar_lookup.api.deps import get_http_client


Handler = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


# =============================================================================
# Fake Upstream Services
# =============================================================================

class FakeUpstream:
    """
    Callable for httpx.MockTransport that routes requests to the four
    upstream services by URL and records every request it sees.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.handlers: Dict[str, Handler] = {
            "catalog": httpx.Response(200, json=generate_catalog_response()),
            "colors": httpx.Response(200, json=generate_colors_response()),
            "tags": httpx.Response(200, json=generate_tags_response()),
            "llm": httpx.Response(200, json=generate_chat_completion()),
        }

    @staticmethod
    def route(request: httpx.Request) -> str:
        path = request.url.path
        if request.url.host == "api.daac.asf.alaska.edu":
            return "catalog"
        if path.endswith("/colors"):
            return "colors"
        if path.endswith("/tags"):
            return "tags"
        if path.endswith("/chat/completions"):
            return "llm"
        raise AssertionError(f"Unexpected outbound request: {request.url}")

    def set(self, name: str, handler: Handler) -> None:
        self.handlers[name] = handler

    def set_json(self, name: str, payload: Any, status_code: int = 200) -> None:
        self.handlers[name] = httpx.Response(status_code, json=payload)

    def calls(self, name: str) -> List[httpx.Request]:
        return [r for r in self.requests if self.route(r) == name]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.handlers[self.route(request)]
        if isinstance(handler, Exception):
            raise handler
        if isinstance(handler, httpx.Response):
            return httpx.Response(
                handler.status_code,
                headers=handler.headers,
                content=handler.content,
            )
        return handler(request)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
async def mock_http_client(upstream) -> AsyncIterator[httpx.AsyncClient]:
    """AsyncClient whose every request is answered by the fake upstream."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(upstream)) as client:
        yield client


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        IMAGGA_API_KEY="test-imagga-key",
        IMAGGA_API_SECRET="test-imagga-secret",
        OPEN_ROUTER_API="test-openrouter-key",
        IMAGGA_BASE_URL="https://api.imagga.com/v2",
        LLM_BASE_URL="https://openrouter.ai/api/v1",
        LLM_MODEL_NAME="openai/gpt-4o-mini",
        ASF_SEARCH_URL="https://api.daac.asf.alaska.edu/services/search/param",
        ASF_DATASET="SENTINEL-1",
        ASF_MAX_RESULTS=250,
    )


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app():
    """Get the FastAPI application instance."""
    from sar_lookup.main import app as fastapi_app
    return fastapi_app


@pytest.fixture
def client(app, test_settings, upstream) -> Generator[TestClient, None, None]:
    """Test client with settings and outbound HTTP replaced by fakes."""
    async def override_http_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(upstream)) as http_client:
            yield http_client

    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_http_client] = override_http_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sar_request() -> Dict[str, Any]:
    return {"latitude": 37.7749, "longitude": -122.4194}
