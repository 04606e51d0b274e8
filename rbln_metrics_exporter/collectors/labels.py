"""
Label model shared by all metric families.
"""

from ..models.device import DeviceRecord
from ..models.placement import PlacementBinding, Placements


CARD = "card"
NAME = "name"
UUID = "uuid"
DEVICE_ID = "deviceID"
HOSTNAME = "hostname"
DRIVER_VERSION = "driver_version"
FIRMWARE_VERSION = "firmware_version"
NAMESPACE = "namespace"
POD = "pod"
CONTAINER = "container"

BASE_LABELS = (CARD, NAME, UUID, DEVICE_ID, HOSTNAME, DRIVER_VERSION, FIRMWARE_VERSION)
POD_LABELS = (NAMESPACE, POD, CONTAINER)

_UNBOUND = PlacementBinding(pod="", namespace="", container="")


def label_names(include_pod_labels: bool) -> tuple[str, ...]:
    """Label schema for the deployment mode."""
    if include_pod_labels:
        return BASE_LABELS + POD_LABELS
    return BASE_LABELS


def build_labels(
    device: DeviceRecord,
    hostname: str,
    placements: Placements,
    include_pod_labels: bool,
) -> dict[str, str]:
    """
    Build the label set of one device.

    Placement labels are present only when include_pod_labels is set;
    an unclaimed device then carries empty placement values.
    """
    labels = {
        CARD: device.card,
        NAME: device.name,
        UUID: device.uuid,
        DEVICE_ID: device.device_id,
        HOSTNAME: hostname,
        DRIVER_VERSION: device.driver_version,
        FIRMWARE_VERSION: device.firmware_version,
    }

    if include_pod_labels:
        binding = placements.get(device.name, _UNBOUND)
        labels[NAMESPACE] = binding.namespace
        labels[POD] = binding.pod
        labels[CONTAINER] = binding.container

    return labels
