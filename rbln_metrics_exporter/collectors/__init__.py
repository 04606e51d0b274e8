"""
Metric families exported for RBLN devices.
"""

from prometheus_client import CollectorRegistry

from .base import MetricSet
from .hardware import HardwareMetrics
from .health import HealthMetrics
from .memory import MemoryMetrics
from .utilization import UtilizationMetrics

__all__ = [
    "MetricSet",
    "HardwareMetrics",
    "HealthMetrics",
    "MemoryMetrics",
    "UtilizationMetrics",
    "create_metric_sets",
]


def create_metric_sets(
    registry: CollectorRegistry,
    hostname: str,
    include_pod_labels: bool = False,
) -> list[MetricSet]:
    """
    Create all metric families in update order and register them.

    Args:
        registry: Registry served on /metrics
        hostname: Value of the hostname label
        include_pod_labels: Add namespace/pod/container labels

    Returns:
        List of MetricSets
    """
    metric_sets: list[MetricSet] = [
        HardwareMetrics(hostname, include_pod_labels),
        HealthMetrics(hostname, include_pod_labels),
        MemoryMetrics(hostname, include_pod_labels),
        UtilizationMetrics(hostname, include_pod_labels),
    ]

    for metric_set in metric_sets:
        metric_set.register(registry)

    return metric_sets
