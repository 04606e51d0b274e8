"""
RBLN daemon client.
"""

from .client import DeviceTelemetryClient, InventoryMode, strip_scheme

__all__ = [
    "DeviceTelemetryClient",
    "InventoryMode",
    "strip_scheme",
]
