"""
RBLN Metrics Exporter - Prometheus exporter for Rebellions NPU devices.

Collects telemetry from the RBLN daemon, enriches it with the Kubernetes
workloads holding each device, and serves the result for scraping.
"""

from .const import APP_VERSION

__version__ = APP_VERSION
