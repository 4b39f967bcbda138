# src/volume_stats_exporter/core/collection.py
"""
One poll-decode-project-publish cycle against the kubelet.
"""

import logging
from enum import Enum

from volume_stats_exporter.collectors.base_collector import BaseCollector
from volume_stats_exporter.core.exceptions import CollectionError, UpstreamStatusError
from volume_stats_exporter.core.projector import project_summary
from volume_stats_exporter.core.registry import VolumeStatsRegistry

logger = logging.getLogger(__name__)


class LoopState(Enum):
    IDLE = "idle"
    COLLECTING = "collecting"


class VolumeStatsCollection:
    """
    Drives collector -> projector -> registry for one scrape at a time.

    A failed scrape increments the error counter and leaves the published
    observations untouched; the next scheduled run simply tries again.
    """

    def __init__(self, collector: BaseCollector, registry: VolumeStatsRegistry, endpoint: str = ""):
        self.collector = collector
        self.registry = registry
        self.endpoint = endpoint
        self._state = LoopState.IDLE

    @property
    def state(self) -> LoopState:
        return self._state

    async def collect_once(self) -> bool:
        """
        Runs one scrape. Returns True when the registry was updated.
        """
        if self._state is LoopState.COLLECTING:
            logger.warning("Previous volume stats collection still in progress, skipping.")
            return False

        self._state = LoopState.COLLECTING
        try:
            logger.debug("Starting volume stats collection")
            try:
                summary = await self.collector.collect()
            except CollectionError as e:
                self.registry.record_error()
                if isinstance(e, UpstreamStatusError):
                    logger.error(
                        "Failed to fetch stats from %s: status %d", self.endpoint, e.status_code
                    )
                else:
                    logger.error("Failed to fetch stats from %s: %s", self.endpoint, e)
                return False

            observations = project_summary(summary)
            self.registry.replace(observations)
            self.registry.record_success()

            logger.debug(
                "Volume stats collection completed: %d pod(s), %d observation(s)",
                len(summary.pods),
                len(observations),
            )
            return True
        finally:
            self._state = LoopState.IDLE
