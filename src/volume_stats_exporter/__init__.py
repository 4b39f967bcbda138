# src/volume_stats_exporter/__init__.py
"""
Kubelet volume stats exporter.

Republishes the per-PVC volume figures from the kubelet's /stats/summary
endpoint under the historical kubelet_volume_stats_* metric names.
"""

__version__ = "0.1.0"
