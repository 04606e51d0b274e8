"""
Memory metrics.

The daemon reports DRAM in GiB; the exported gauges are in bytes.
"""

from ..models.device import DeviceRecord
from .base import MetricSet


class MemoryMetrics(MetricSet):
    FAMILY = "memory"
    GAUGES = {
        "DRAM_USED": "DRAM used (bytes)",
        "DRAM_TOTAL": "DRAM total (bytes)",
    }

    def observe(self, device: DeviceRecord, labels: dict[str, str]) -> None:
        self.set("DRAM_USED", labels, device.dram_used_bytes)
        self.set("DRAM_TOTAL", labels, device.dram_total_bytes)
