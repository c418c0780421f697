"""
Prometheus metrics endpoint.

Example:
    GET /metrics

    Response:
        # HELP calsync_unit_syncs_total Total number of housing unit imports
        # TYPE calsync_unit_syncs_total counter
        calsync_unit_syncs_total{status="success"} 12.0
        ...
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics", response_class=Response)
async def metrics() -> Any:
    """
    Expose feed fetch, import and export metrics in Prometheus text format.

    Returns:
        Response: Metrics with Content-Type set to the Prometheus exposition format
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
