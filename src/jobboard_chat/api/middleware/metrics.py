"""Request timing: a Server-Timing header and one access line per request."""
from __future__ import annotations

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

# Probes are polled constantly; keep them out of INFO.
QUIET_PATHS = frozenset({"/healthz", "/readyz"})
SLOW_REQUEST_MS = 1000.0


class RequestTimingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, slow_ms: float = SLOW_REQUEST_MS) -> None:
        super().__init__(app)
        self.slow_ms = slow_ms

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers["Server-Timing"] = f"app;dur={elapsed_ms:.1f}"

        path = request.url.path
        if elapsed_ms >= self.slow_ms:
            level = logging.WARNING
        elif path in QUIET_PATHS:
            level = logging.DEBUG
        else:
            level = logging.INFO
        logger.log(
            level, "%s %s -> %d in %.1fms",
            request.method, path, response.status_code, elapsed_ms,
        )
        return response
