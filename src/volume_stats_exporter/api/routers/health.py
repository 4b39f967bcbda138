# src/volume_stats_exporter/api/routers/health.py
"""
Liveness and readiness probes.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from volume_stats_exporter.api.dependencies import get_registry, get_settings
from volume_stats_exporter.core.config import Config
from volume_stats_exporter.core.registry import VolumeStatsRegistry

router = APIRouter()


@router.get("/health", response_class=PlainTextResponse)
async def health():
    """Liveness probe: succeeds as long as the process serves requests."""
    return PlainTextResponse("OK")


@router.get("/ready", response_class=PlainTextResponse)
async def ready(
    registry: VolumeStatsRegistry = Depends(get_registry),
    settings: Config = Depends(get_settings),
):
    """
    Readiness probe.

    Unconditional by default; with READY_REQUIRES_SUCCESSFUL_SCRAPE it
    reports 503 until the first kubelet poll has succeeded.
    """
    if settings.READY_REQUIRES_SUCCESSFUL_SCRAPE and not registry.has_succeeded:
        return PlainTextResponse("Not Ready", status_code=503)
    return PlainTextResponse("Ready")
