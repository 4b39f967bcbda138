from .base_collector import BaseCollector
from .kubelet_collector import KubeletSummaryCollector

__all__ = [
    "BaseCollector",
    "KubeletSummaryCollector",
]
