"""HTTP request logging

One log line per request with method, path, status and duration.
"""

import logging
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    EXCLUDED_PATHS = ("/health", "/favicon.ico")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if path.startswith(self.EXCLUDED_PATHS):
            return await call_next(request)

        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "request_completed method=%s path=%s status=%d duration_ms=%.2f",
                request.method,
                path,
                status_code,
                duration_ms,
            )
