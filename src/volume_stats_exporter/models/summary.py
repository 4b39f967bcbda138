# src/volume_stats_exporter/models/summary.py
"""
Pydantic models for the kubelet /stats/summary document.

Only the parts of the summary API needed for volume statistics are
modelled; unknown fields are ignored so newer kubelets keep decoding.
"""

from datetime import datetime
from typing import Annotated, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from volume_stats_exporter.core.exceptions import DecodeError

UINT64_MAX = 2**64 - 1
PREVIEW_LENGTH = 500

# JSON integers only: strings, floats and negative numbers are shape errors.
UInt64 = Annotated[int, Field(strict=True, ge=0, le=UINT64_MAX)]


class _SummaryModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PodReference(_SummaryModel):
    """Identity of the pod owning a set of stats."""

    name: str = ""
    namespace: str = ""
    uid: str = ""


class PVCReference(_SummaryModel):
    """Reference to the PersistentVolumeClaim backing a volume."""

    name: str = ""
    namespace: str = ""


class FsStats(_SummaryModel):
    """
    Filesystem usage figures as reported by the kubelet.

    Every figure is optional: the kubelet omits values it could not measure.
    """

    time: Optional[datetime] = Field(None, description="Time at which the stats were sampled")
    capacity_bytes: Optional[UInt64] = Field(None, alias="capacityBytes")
    used_bytes: Optional[UInt64] = Field(None, alias="usedBytes")
    available_bytes: Optional[UInt64] = Field(None, alias="availableBytes")
    inodes_total: Optional[UInt64] = Field(None, alias="inodes")
    inodes_free: Optional[UInt64] = Field(None, alias="inodesFree")
    inodes_used: Optional[UInt64] = Field(None, alias="inodesUsed")


class VolumeStats(FsStats):
    """Stats for a single volume mounted by a pod."""

    name: str = ""
    pvc_ref: Optional[PVCReference] = Field(None, alias="pvcRef")


class PodStats(_SummaryModel):
    """Stats for a single pod, including all of its volumes."""

    pod_ref: PodReference = Field(default_factory=PodReference, alias="podRef")
    volumes: List[VolumeStats] = Field(default_factory=list, alias="volume")
    ephemeral_storage: Optional[FsStats] = Field(None, alias="ephemeral-storage")

    @field_validator("volumes", mode="before")
    @classmethod
    def _null_volumes(cls, value):
        return [] if value is None else value


class NodeStats(_SummaryModel):
    node_name: str = Field("", alias="nodeName")


class StatsSummary(_SummaryModel):
    """A decoded /stats/summary response."""

    node: NodeStats = Field(default_factory=NodeStats)
    pods: List[PodStats] = Field(default_factory=list)

    @field_validator("pods", mode="before")
    @classmethod
    def _null_pods(cls, value):
        return [] if value is None else value

    @property
    def node_name(self) -> str:
        return self.node.node_name


def decode_summary(raw: Union[bytes, str]) -> StatsSummary:
    """
    Parses a raw /stats/summary payload into a StatsSummary.

    Raises:
        DecodeError: If the payload is not valid JSON or does not match the
            expected shape. No partially decoded summary is ever returned.
    """
    try:
        return StatsSummary.model_validate_json(raw)
    except ValidationError as e:
        text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
        raise DecodeError(f"failed to decode stats summary: {e}", preview=text[:PREVIEW_LENGTH]) from e
