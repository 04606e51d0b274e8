"""
Data models for device records and workload placement.
"""

from .device import CARD_NAMES, DeviceRecord, card_name
from .placement import PlacementBinding, Placements

__all__ = [
    "CARD_NAMES",
    "DeviceRecord",
    "card_name",
    "PlacementBinding",
    "Placements",
]
