"""
Base class for metric families.

A MetricSet owns a group of labelled gauges. Every update starts from
empty gauges, so a device missing from the current inventory stops being
exported instead of freezing at its last value.
"""

from abc import ABC, abstractmethod

from prometheus_client import CollectorRegistry, Gauge

from ..const import METRIC_PREFIX
from ..models.device import DeviceRecord
from ..models.placement import Placements
from .labels import build_labels, label_names


def metric_name(metric: str) -> str:
    """Full exported name, e.g. RBLN_DEVICE_STATUS:TEMPERATURE."""
    return f"{METRIC_PREFIX}:{metric}"


class MetricSet(ABC):
    """
    Abstract metric family.

    Subclasses declare their gauges in GAUGES (metric -> help text) and
    implement observe() to set values for one device.
    """

    # Family name used in logs (override in subclasses)
    FAMILY: str = "unknown"

    # Metric suffix -> help text (override in subclasses)
    GAUGES: dict[str, str] = {}

    def __init__(self, hostname: str, include_pod_labels: bool = False):
        """
        Initialize metric family.

        Args:
            hostname: Value of the hostname label
            include_pod_labels: Add namespace/pod/container labels
        """
        self.hostname = hostname
        self.include_pod_labels = include_pod_labels

        labelnames = label_names(include_pod_labels)
        self.gauges: dict[str, Gauge] = {
            metric: Gauge(metric_name(metric), documentation, labelnames, registry=None)
            for metric, documentation in self.GAUGES.items()
        }

    def register(self, registry: CollectorRegistry) -> None:
        """Register all gauges with a registry."""
        for gauge in self.gauges.values():
            registry.register(gauge)

    def reset(self) -> None:
        """Drop every exported series of this family."""
        for gauge in self.gauges.values():
            gauge.clear()

    def update(self, devices: list[DeviceRecord], placements: Placements) -> None:
        """
        Repopulate series from an inventory and a placement snapshot.

        Args:
            devices: Current device inventory
            placements: Placement snapshot of this cycle
        """
        for device in devices:
            labels = build_labels(device, self.hostname, placements, self.include_pod_labels)
            self.observe(device, labels)

    @abstractmethod
    def observe(self, device: DeviceRecord, labels: dict[str, str]) -> None:
        """Set this family's gauges for one device."""
        pass

    def set(self, metric: str, labels: dict[str, str], value: float) -> None:
        self.gauges[metric].labels(**labels).set(value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({', '.join(self.gauges)})"
