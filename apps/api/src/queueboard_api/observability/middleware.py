"""Observability middleware for FastAPI."""

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from queueboard_api.observability.metrics import HTTP_REQUEST_DURATION, HTTP_REQUESTS_TOTAL


def _normalize_path(path: str) -> str:
    """Normalize path to avoid high-cardinality metrics.

    Static asset paths are collapsed to a single label.
    """
    parts = [part for part in path.strip("/").split("/") if part]
    if not parts:
        return "/"
    if "." in parts[-1]:
        parts[-1] = "{asset}"
    return "/" + "/".join(parts)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to collect HTTP request metrics."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Process request and collect metrics."""
        # Skip metrics endpoint to avoid self-referential metrics
        if request.url.path == "/metrics":
            return await call_next(request)

        start_time = time.monotonic()
        status_code = 500  # Default to error if exception occurs

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration = time.monotonic() - start_time
            labels = {
                "method": request.method,
                "endpoint": _normalize_path(request.url.path),
                "status_code": str(status_code),
            }
            HTTP_REQUEST_DURATION.labels(**labels).observe(duration)
            HTTP_REQUESTS_TOTAL.labels(**labels).inc()
