# src/volume_stats_exporter/api/app.py
"""
FastAPI application factory for the exporter's HTTP endpoints.

The app only reads the registry it is given; collection runs elsewhere.
"""

from typing import Optional

from fastapi import FastAPI

from volume_stats_exporter import __version__
from volume_stats_exporter.api.routers import health, metrics
from volume_stats_exporter.core.config import Config, config
from volume_stats_exporter.core.registry import VolumeStatsRegistry


def create_app(registry: VolumeStatsRegistry, settings: Optional[Config] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        registry: The registry shared with the collection loop.
        settings: Settings for the probes; defaults to the environment config.

    Returns:
        A configured FastAPI application instance.
    """
    app = FastAPI(
        title="Kubelet Volume Stats Exporter",
        description="Republishes kubelet volume statistics in the Prometheus format.",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.registry = registry
    app.state.settings = settings or config

    app.include_router(metrics.router, tags=["Metrics"])
    app.include_router(health.router, tags=["Health"])

    return app
