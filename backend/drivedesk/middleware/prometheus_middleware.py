"""
HTTP request metrics.

Record ids in paths are collapsed to ``:id`` so one booking route is one
label set, not one per booking.
"""

import time
from typing import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.ulid_helper import is_valid_ulid
from ..monitoring.prometheus_metrics import prometheus_metrics

METRICS_PATHS = frozenset({"/metrics", "/metrics/prometheus"})


def normalize_endpoint(path: str) -> str:
    """``/api/v1/bookings/01J...`` -> ``/api/v1/bookings/:id``"""
    return "/".join(
        ":id" if segment.isdigit() or is_valid_ulid(segment) else segment
        for segment in path.split("/")
    )


class PrometheusMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.url.path in METRICS_PATHS:
            return await call_next(request)

        method = request.method
        endpoint = normalize_endpoint(request.url.path)
        prometheus_metrics.track_http_request_start(method, endpoint)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            prometheus_metrics.record_http_request(
                method=method,
                endpoint=endpoint,
                duration=time.perf_counter() - started,
                status_code=response.status_code,
            )
            return response
        finally:
            prometheus_metrics.track_http_request_end(method, endpoint)
