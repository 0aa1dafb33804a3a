# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
HTTP Middleware — request ID propagation and Prometheus metrics.
"""

import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from roster.controllers.errors import unhandled_error_handler
from roster.core.logging import request_id_var
from roster.metrics import REQUEST_COUNT, REQUEST_LATENCY, HTTP_ERRORS

KNOWN_SEGMENTS: set[str] = {
    "api", "members", "uploads", "health", "metrics", "ready",
}

SKIP_PATHS: tuple[str, ...] = (
    "/health", "/health/ready", "/metrics", "/openapi.json", "/docs", "/redoc",
)


def normalize_path(path: str) -> str:
    parts = path.strip("/").split("/")
    if parts == [""]:
        return path
    return "/" + "/".join(p if p in KNOWN_SEGMENTS else "{param}" for p in parts)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Propagate or generate X-Request-ID for tracing."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        except Exception as exc:
            # Unhandled errors still get the JSON 500 body and the request ID header.
            response = await unhandled_error_handler(request, exc)
        finally:
            request_id_var.reset(token)
        response.headers["X-Request-ID"] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Track request count, latency, and error rate via Prometheus."""

    async def dispatch(self, request: Request, call_next):
        start = time.time()
        try:
            response = await call_next(request)
        except Exception:
            self._record(request, 500, time.time() - start)
            raise
        self._record(request, response.status_code, time.time() - start)
        return response

    @staticmethod
    def _record(request: Request, status_code: int, duration: float) -> None:
        path = request.url.path
        if path in SKIP_PATHS:
            return
        endpoint = normalize_path(path)
        REQUEST_COUNT.labels(
            method=request.method, endpoint=endpoint, status=str(status_code),
        ).inc()
        REQUEST_LATENCY.labels(method=request.method, endpoint=endpoint).observe(duration)
        if status_code >= 400:
            HTTP_ERRORS.labels(
                method=request.method, endpoint=endpoint, status=str(status_code),
            ).inc()
