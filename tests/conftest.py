"""
Pytest configuration and fixtures.
"""

import os

import pytest
from prometheus_client import CollectorRegistry

from rbln_metrics_exporter.collectors import create_metric_sets


@pytest.fixture
def registry() -> CollectorRegistry:
    """Fresh registry per test."""
    return CollectorRegistry()


@pytest.fixture
def metric_sets(registry):
    """Metric families without placement labels."""
    return create_metric_sets(registry, hostname="node1", include_pod_labels=False)


@pytest.fixture
def pod_metric_sets(registry):
    """Metric families with placement labels."""
    return create_metric_sets(registry, hostname="node1", include_pod_labels=True)


@pytest.fixture
def clean_env(monkeypatch):
    """Environment without exporter variables."""
    for key in list(os.environ):
        if key.startswith("RBLN_METRICS_EXPORTER_") or key in ("NODE_NAME", "KUBERNETES_SERVICE_HOST"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("NODE_NAME", "node1")
