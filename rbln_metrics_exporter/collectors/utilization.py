"""
Utilization metric.
"""

from ..models.device import DeviceRecord
from .base import MetricSet


class UtilizationMetrics(MetricSet):
    FAMILY = "utilization"
    GAUGES = {
        "UTILIZATION": "Utilization (%)",
    }

    def observe(self, device: DeviceRecord, labels: dict[str, str]) -> None:
        self.set("UTILIZATION", labels, device.utilization)
