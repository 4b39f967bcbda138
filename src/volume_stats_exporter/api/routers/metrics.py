# src/volume_stats_exporter/api/routers/metrics.py
"""
Prometheus scrape endpoint. Serves whatever the registry currently holds,
even when the last kubelet poll failed.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST

from volume_stats_exporter.api.dependencies import get_registry
from volume_stats_exporter.core.registry import VolumeStatsRegistry

router = APIRouter()


@router.get("/metrics", include_in_schema=False)
async def metrics(registry: VolumeStatsRegistry = Depends(get_registry)) -> Response:
    """Expose the volume stats in the Prometheus text exposition format."""
    return Response(content=registry.render(), media_type=CONTENT_TYPE_LATEST)
