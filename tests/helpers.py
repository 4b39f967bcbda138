# tests/helpers.py
"""Shared sample data and fakes for the test suite."""

from volume_stats_exporter.collectors.base_collector import BaseCollector
from volume_stats_exporter.models.summary import StatsSummary

KUBELET_ENDPOINT = "https://kubelet.test:10250"
STATS_SUMMARY_URL = f"{KUBELET_ENDPOINT}/stats/summary"

# Trimmed-down /stats/summary response as served by a real kubelet.
SAMPLE_SUMMARY = {
    "node": {
        "nodeName": "worker-1",
        "systemContainers": [{"name": "kubelet", "startTime": "2025-01-01T00:00:00Z"}],
        "cpu": {"time": "2025-01-01T12:00:00Z", "usageNanoCores": 123456},
    },
    "pods": [
        {
            "podRef": {"name": "postgres-0", "namespace": "databases", "uid": "1111-aaaa"},
            "startTime": "2025-01-01T00:00:00Z",
            "containers": [{"name": "postgres", "startTime": "2025-01-01T00:00:00Z"}],
            "volume": [
                {
                    "time": "2025-01-01T12:00:00Z",
                    "availableBytes": 7516192768,
                    "capacityBytes": 10737418240,
                    "usedBytes": 3221225472,
                    "inodesFree": 654000,
                    "inodes": 655360,
                    "inodesUsed": 1360,
                    "name": "data",
                    "pvcRef": {"name": "data-postgres-0", "namespace": "databases"},
                },
                {
                    "time": "2025-01-01T12:00:00Z",
                    "availableBytes": 1000,
                    "capacityBytes": 2000,
                    "usedBytes": 1000,
                    "inodesFree": 10,
                    "inodes": 20,
                    "inodesUsed": 10,
                    "name": "kube-api-access-abcde",
                },
            ],
            "ephemeral-storage": {
                "time": "2025-01-01T12:00:00Z",
                "availableBytes": 50000,
                "capacityBytes": 100000,
                "usedBytes": 50000,
                "inodesFree": 100,
                "inodes": 200,
                "inodesUsed": 100,
            },
        },
        {
            "podRef": {"name": "nginx-7d4f8b", "namespace": "web", "uid": "2222-bbbb"},
            "volume": [{"name": "kube-api-access-xyz", "capacityBytes": 100}],
        },
    ],
}


def make_summary_dict(*pods) -> dict:
    """Builds a minimal summary document from (namespace, pod, volumes) tuples."""
    return {
        "node": {"nodeName": "worker-1"},
        "pods": [
            {"podRef": {"name": name, "namespace": namespace, "uid": f"uid-{name}"}, "volume": volumes}
            for namespace, name, volumes in pods
        ],
    }


class StaticCollector(BaseCollector):
    """Collector returning queued summaries or raising queued errors, in order."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0
        self.closed = False

    async def collect(self) -> StatsSummary:
        self.calls += 1
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    async def close(self):
        self.closed = True
