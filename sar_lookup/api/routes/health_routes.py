import threading
import time

from fastapi import APIRouter

from sar_lookup.schemas.sar_schema import HealthResponse

router = APIRouter(tags=["health"])


class HealthClock:
    """Epoch-millisecond timestamps that strictly increase across calls."""

    def __init__(self, clock=time.time):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def now_ms(self) -> int:
        with self._lock:
            current = int(self._clock() * 1000)
            if current <= self._last:
                current = self._last + 1
            self._last = current
            return current


health_clock = HealthClock()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="ok", timestamp=health_clock.now_ms())
