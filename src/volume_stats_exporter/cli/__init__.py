# src/volume_stats_exporter/cli/__init__.py
"""
Exporter CLI package.

Exposes the top-level Typer `app` for the console entrypoint and tests.
"""

from .main import app

__all__ = ["app"]
