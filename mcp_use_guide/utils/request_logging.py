"""
Request logging middleware - one line per HTTP request.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)

# Probes hit these constantly; keep them out of INFO logs
QUIET_PATHS = ("/health", "/healthz")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status code and duration for each request"""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        path = request.url.path
        client = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.exception(f"{request.method} {path} from {client} failed after {duration_ms:.1f}ms")
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        level = logging.DEBUG if path in QUIET_PATHS else logging.INFO
        logger.log(
            level,
            f"{request.method} {path} -> {response.status_code} ({duration_ms:.1f}ms) from {client}",
        )
        return response
