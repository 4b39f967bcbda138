# src/volume_stats_exporter/api/dependencies.py
"""
FastAPI dependency injection functions.

The registry and settings are attached to app.state by create_app(), so
route handlers never reach for module-level globals.
"""

from fastapi import Request

from volume_stats_exporter.core.config import Config
from volume_stats_exporter.core.registry import VolumeStatsRegistry


async def get_registry(request: Request) -> VolumeStatsRegistry:
    """Provides the registry shared with the collection loop."""
    return request.app.state.registry


async def get_settings(request: Request) -> Config:
    """Provides the settings the exporter was started with."""
    return request.app.state.settings
