# src/volume_stats_exporter/core/projector.py
"""
Maps a decoded stats summary onto the published volume observations.

Only volumes backed by a PersistentVolumeClaim are exported. Labels always
come from the consuming pod (its namespace and name), never from the PVC
reference, so dashboards keyed on pod/namespace keep working.
"""

import logging

from volume_stats_exporter.models.observation import MetricKind, ObservationKey, ObservationSet
from volume_stats_exporter.models.summary import StatsSummary

logger = logging.getLogger(__name__)


def project_summary(summary: StatsSummary) -> ObservationSet:
    """
    Builds a fresh ObservationSet from a stats summary.

    Values are converted to float, which loses precision above 2**53 bytes.
    When two volumes resolve to the same (namespace, pvc, pod) triple the
    later one wins; nothing is aggregated.
    """
    observations = ObservationSet()
    pods_with_claims = 0
    volumes_processed = 0

    for pod in summary.pods:
        pod_ref = pod.pod_ref
        if any(_claim_name(volume) for volume in pod.volumes):
            pods_with_claims += 1
        else:
            logger.debug(
                "Skipping pod without PVC volumes: %s/%s (%d volume(s))",
                pod_ref.namespace,
                pod_ref.name,
                len(pod.volumes),
            )
            continue

        for volume in pod.volumes:
            if not _claim_name(volume):
                logger.debug(
                    "Skipping volume '%s' of pod %s/%s: no PVC reference",
                    volume.name,
                    pod_ref.namespace,
                    pod_ref.name,
                )
                continue

            key = ObservationKey(
                namespace=pod_ref.namespace,
                persistentvolumeclaim=volume.pvc_ref.name,
                pod=pod_ref.name,
            )
            for kind in MetricKind:
                value = getattr(volume, kind.attribute)
                if value is not None:
                    observations.set(kind, key, float(value))

            volumes_processed += 1
            logger.debug(
                "Updated metrics for volume '%s' (namespace=%s, pod=%s, pvc=%s, capacity=%s, used=%s, available=%s)",
                volume.name,
                key.namespace,
                key.pod,
                key.persistentvolumeclaim,
                volume.capacity_bytes,
                volume.used_bytes,
                volume.available_bytes,
            )

    logger.debug(
        "Metrics projection completed: %d pod(s) with PVC volumes, %d volume(s) processed",
        pods_with_claims,
        volumes_processed,
    )
    return observations


def _claim_name(volume) -> str:
    # A pvcRef without a name cannot produce a usable persistentvolumeclaim label.
    return volume.pvc_ref.name if volume.pvc_ref is not None else ""
