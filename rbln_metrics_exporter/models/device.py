"""
Device record model.

A DeviceRecord is one accelerator card as seen in a single collection
cycle. Identity fields always come from the serviceable-device stream;
telemetry and firmware fields keep their zero defaults whenever the
daemon returned nothing for the device.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType


# Vendor device-id code -> card model name
CARD_NAMES: Mapping[str, str] = MappingProxyType({
    "1020": "RBLN-CA02",
    "1021": "RBLN-CA02",
    "1120": "RBLN-CA12",
    "1121": "RBLN-CA12",
    "1150": "RBLN-CA15",
    "1220": "RBLN-CA22",
    "1221": "RBLN-CA22",
    "1250": "RBLN-CA25",
})

GIB = 1 << 30


def card_name(device_id: str, table: Mapping[str, str] = CARD_NAMES) -> str:
    """Look up the card model for a device-id code; unknown codes pass through."""
    return table.get(device_id, device_id)


def gib_to_bytes(value: float) -> int:
    """Convert a GiB figure reported by the daemon to whole bytes."""
    return round(value * GIB)


@dataclass
class DeviceRecord:
    """Merged identity, telemetry and firmware state of one card."""

    # Identity
    uuid: str
    name: str
    device_id: str
    card: str

    # Telemetry
    temperature: float = 0.0  # °C
    power: float = 0.0  # W
    dram_used_gib: float = 0.0
    dram_total_gib: float = 0.0
    utilization: float = 0.0  # %
    status: int = 0

    # Firmware
    driver_version: str = ""
    firmware_version: str = ""
    smc_version: str = ""

    @property
    def dram_used_bytes(self) -> int:
        return gib_to_bytes(self.dram_used_gib)

    @property
    def dram_total_bytes(self) -> int:
        return gib_to_bytes(self.dram_total_gib)

    def __repr__(self) -> str:
        return f"DeviceRecord({self.name!r}, uuid={self.uuid!r}, card={self.card!r})"
