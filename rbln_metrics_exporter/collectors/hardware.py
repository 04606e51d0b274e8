"""
Hardware metrics: temperature and card power.
"""

from ..models.device import DeviceRecord
from .base import MetricSet


class HardwareMetrics(MetricSet):
    FAMILY = "hardware"
    GAUGES = {
        "TEMPERATURE": "NPU temperature (C)",
        "CARD_POWER": "Card power usage (W)",
    }

    def observe(self, device: DeviceRecord, labels: dict[str, str]) -> None:
        self.set("TEMPERATURE", labels, device.temperature)
        self.set("CARD_POWER", labels, device.power)
