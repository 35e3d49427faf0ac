"""
Prometheus scrape endpoint.

Public like the rest of the monitoring surface: it carries timings and counts
only, never instructor or student data.
"""

from fastapi import APIRouter, Response

from ...monitoring.prometheus_metrics import prometheus_metrics

router = APIRouter(prefix="/metrics", tags=["monitoring"])


@router.get("", include_in_schema=False, response_class=Response, response_model=None)
@router.get("/prometheus", include_in_schema=False, response_class=Response, response_model=None)
async def get_prometheus_metrics() -> Response:
    return Response(
        content=prometheus_metrics.get_metrics(),
        media_type=prometheus_metrics.get_content_type(),
        headers={"Cache-Control": "no-cache, no-store, must-revalidate"},
    )
