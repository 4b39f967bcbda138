# src/volume_stats_exporter/models/observation.py
"""
Types describing the labelled values published by the exporter.
"""

from enum import Enum
from typing import Dict, Iterator, NamedTuple, Optional, Tuple

LABEL_NAMES = ("namespace", "persistentvolumeclaim", "pod")


class ObservationKey(NamedTuple):
    """Label values identifying one volume series: namespace, PVC name, pod name."""

    namespace: str
    persistentvolumeclaim: str
    pod: str


class MetricKind(Enum):
    """
    The six volume quantities that are republished.

    Each member carries (metric suffix, help text, VolumeStats attribute).
    """

    CAPACITY_BYTES = ("capacity_bytes", "Capacity in bytes of the volume", "capacity_bytes")
    AVAILABLE_BYTES = ("available_bytes", "Number of available bytes in the volume", "available_bytes")
    USED_BYTES = ("used_bytes", "Number of used bytes in the volume", "used_bytes")
    INODES = ("inodes", "Maximum number of inodes in the volume", "inodes_total")
    INODES_FREE = ("inodes_free", "Number of free inodes in the volume", "inodes_free")
    INODES_USED = ("inodes_used", "Number of used inodes in the volume", "inodes_used")

    def __init__(self, suffix: str, help_text: str, attribute: str):
        self.suffix = suffix
        self.help_text = help_text
        self.attribute = attribute

    def metric_name(self, prefix: str) -> str:
        return f"{prefix}_{self.suffix}"


class ObservationSet:
    """
    All volume observations derived from one stats summary.

    Built by the projector, then handed to the registry which treats it as
    immutable.
    """

    def __init__(self):
        self._values: Dict[MetricKind, Dict[ObservationKey, float]] = {kind: {} for kind in MetricKind}

    def set(self, kind: MetricKind, key: ObservationKey, value: float) -> None:
        self._values[kind][key] = value

    def get(self, kind: MetricKind, key: ObservationKey) -> Optional[float]:
        return self._values[kind].get(key)

    def series(self, kind: MetricKind) -> Dict[ObservationKey, float]:
        return dict(self._values[kind])

    def keys(self) -> set:
        """Every label triple with at least one observation."""
        return {key for values in self._values.values() for key in values}

    def items(self) -> Iterator[Tuple[MetricKind, ObservationKey, float]]:
        for kind in MetricKind:
            for key, value in self._values[kind].items():
                yield kind, key, value

    def __len__(self) -> int:
        return sum(len(values) for values in self._values.values())

    def __eq__(self, other) -> bool:
        if not isinstance(other, ObservationSet):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"ObservationSet({len(self)} observations)"
