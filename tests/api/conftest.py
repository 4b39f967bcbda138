# tests/api/conftest.py
"""
Shared fixtures for API tests.
Uses FastAPI's TestClient against an app wired to a fresh registry.
"""

import pytest
from fastapi.testclient import TestClient

from volume_stats_exporter.api.app import create_app
from volume_stats_exporter.models.observation import MetricKind, ObservationKey, ObservationSet


@pytest.fixture
def app(registry, settings):
    return create_app(registry, settings)


@pytest.fixture
def client(app):
    """Creates a TestClient for the exporter app."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def sample_observations() -> ObservationSet:
    """Two label triples with a couple of quantities each."""
    observations = ObservationSet()
    app_1 = ObservationKey("default", "data-pvc", "app-1")
    app_2 = ObservationKey("monitoring", "prometheus-db", "prometheus-0")
    observations.set(MetricKind.CAPACITY_BYTES, app_1, 1000.0)
    observations.set(MetricKind.USED_BYTES, app_1, 250.0)
    observations.set(MetricKind.INODES_FREE, app_2, 42.0)
    return observations
