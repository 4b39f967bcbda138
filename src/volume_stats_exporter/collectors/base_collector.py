# src/volume_stats_exporter/collectors/base_collector.py
"""
This module defines the abstract base class for stats collectors.
The collection loop only depends on this interface, which keeps it
testable without a live kubelet.
"""

from abc import ABC, abstractmethod

from volume_stats_exporter.models.summary import StatsSummary


class BaseCollector(ABC):
    """
    Abstract Base Class for stats summary collectors.
    """

    @abstractmethod
    async def collect(self) -> StatsSummary:
        """
        Fetch one stats summary from the source and decode it.

        Implementations raise a CollectionError subclass on failure.
        """
        pass

    async def close(self):
        """
        Clean up resources (e.g., close HTTP sessions).
        """
        pass
