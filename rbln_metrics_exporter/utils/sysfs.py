"""
Sysfs helpers for the rebellions PCI driver.

The driver exposes a "pools" file per PCI device. Its second line starts
with the device name (rbln0, rbln1, ...) that the daemon reports.
"""

from pathlib import Path

from ..const import SYSFS_DRIVER_POOLS
from ..errors import DeviceResolutionError


def pools_path(pci_address: str, template: str = SYSFS_DRIVER_POOLS) -> Path:
    """Path of the pools file for a PCI address."""
    return Path(template.format(pci_address=pci_address))


def resolve_device_name(pci_address: str, template: str = SYSFS_DRIVER_POOLS) -> str:
    """
    Map a PCI address claimed by a pod to the daemon's device name.

    Args:
        pci_address: Device identifier from the kubelet (e.g. 0000:3b:00.0)
        template: Pools file path template with a {pci_address} field

    Returns:
        Device name

    Raises:
        DeviceResolutionError: If the file is unreadable or malformed
    """
    path = pools_path(pci_address, template)
    try:
        content = path.read_text()
    except OSError as e:
        raise DeviceResolutionError(pci_address, f"failed to read {path}: {e}") from e

    lines = content.split("\n")
    if len(lines) < 2 or not lines[1].strip():
        raise DeviceResolutionError(pci_address, f"unexpected format in {path}")

    return lines[1].split()[0]
