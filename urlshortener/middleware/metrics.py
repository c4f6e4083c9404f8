"""HTTP metrics middleware for the URL Shortener application."""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response


def route_template(request: Request) -> str:
    """Matched route path (``/{code}``) rather than the raw path, to keep label cardinality bounded."""
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path or "unmatched"


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record a request counter and a duration histogram for each request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        metrics = getattr(request.app.state, "metrics", None)
        start_time = time.perf_counter()

        response = await call_next(request)

        if metrics is not None:
            duration_ms = (time.perf_counter() - start_time) * 1000
            metrics.record_http_request(
                request.method,
                route_template(request),
                response.status_code,
                duration_ms,
            )

        return response
