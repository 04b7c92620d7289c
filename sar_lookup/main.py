import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sar_lookup.api.routes import health_routes, sar_routes
from sar_lookup.config import settings
from sar_lookup.core.exceptions import SarLookupError
from sar_lookup.core.logging_middleware import TimeLoggingMiddleware

# Configure logging
log_level = settings.LOG_LEVEL.upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open one shared HTTP client for all outbound calls."""
    logger.info("Starting SAR Lookup API...")
    logger.info(f"Imagga credentials configured: {settings.imagga_configured}")
    if not settings.OPEN_ROUTER_API:
        logger.warning("OPEN_ROUTER_API not set - AI interpretation will be unavailable.")

    async with httpx.AsyncClient() as client:
        app.state.http_client = client
        yield
    logger.info("SAR Lookup API stopped")


app = FastAPI(
    title="SAR Lookup API",
    description="Latest Sentinel-1 SAR preview for a coordinate, with vision and LLM interpretation",
    version="0.1.0",
    lifespan=lifespan,
)

# Include routers
app.include_router(health_routes.router)
app.include_router(sar_routes.router)

# Time logger
app.add_middleware(TimeLoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SarLookupError)
async def sar_lookup_error_handler(request: Request, exc: SarLookupError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_error_dict())
