"""
Exception hierarchy for the exporter.

Only DaemonConnectionError is fatal, and only at startup. Everything else
is absorbed by the scheduler or the placement cache and logged.
"""


class ExporterError(Exception):
    """Base class for exporter errors."""

    pass


class DaemonConnectionError(ExporterError):
    """The RBLN daemon could not be reached at startup."""

    def __init__(self, endpoint: str, reason: str):
        self.endpoint = endpoint
        super().__init__(f"Failed to connect to rbln-daemon at {endpoint}: {reason}")


class InventoryUnavailableError(ExporterError):
    """A device or telemetry stream failed; the cycle has no inventory."""

    def __init__(self, call: str, reason: str):
        self.call = call
        super().__init__(f"{call} failed: {reason}")


class CycleTimeoutError(ExporterError):
    """A collection cycle exceeded its time bound."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Collection cycle exceeded {timeout:.1f}s")


class PodResourcesError(ExporterError):
    """The kubelet pod-resources listing failed."""

    pass


class DeviceResolutionError(ExporterError):
    """A PCI device identifier could not be mapped to a device name."""

    def __init__(self, pci_address: str, reason: str):
        self.pci_address = pci_address
        super().__init__(f"Cannot resolve device {pci_address}: {reason}")


class MetricUpdateError(ExporterError):
    """A metric family failed to repopulate; the rest of the cycle is skipped."""

    def __init__(self, family: str, reason: str):
        self.family = family
        super().__init__(f"Updating {family} metrics failed: {reason}")
