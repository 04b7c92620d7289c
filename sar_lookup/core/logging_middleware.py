import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("sar_lookup.timer")

# Health checks are frequent; only log them when debugging
QUIET_PATHS = {"/health"}


class TimeLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and wall time of each request.

    Server errors are logged at WARNING so degraded lookups stand out.
    """

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started

        if response.status_code >= 500:
            level = logging.WARNING
        elif request.url.path in QUIET_PATHS:
            level = logging.DEBUG
        else:
            level = logging.INFO

        logger.log(
            level,
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"in {elapsed * 1000:.1f}ms",
        )
        return response
