"""
Health metric: the daemon's error status code per device.
"""

from ..models.device import DeviceRecord
from .base import MetricSet


class HealthMetrics(MetricSet):
    FAMILY = "health"
    GAUGES = {
        "HEALTH": "NPU health status",
    }

    def observe(self, device: DeviceRecord, labels: dict[str, str]) -> None:
        self.set("HEALTH", labels, device.status)
