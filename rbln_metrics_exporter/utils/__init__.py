"""
Utility functions and helpers.
"""

from .podresources import ContainerClaims, DeviceClaim, PodClaims, PodResourcesClient
from .sysfs import resolve_device_name

__all__ = [
    "PodResourcesClient",
    "PodClaims",
    "ContainerClaims",
    "DeviceClaim",
    "resolve_device_name",
]
