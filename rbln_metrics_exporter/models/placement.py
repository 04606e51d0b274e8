"""
Workload placement model.
"""

from typing import NamedTuple


class PlacementBinding(NamedTuple):
    """Pod, namespace and container currently holding a device."""

    pod: str
    namespace: str
    container: str


# Device name (rbln0, rbln1, ...) -> binding
Placements = dict[str, PlacementBinding]
