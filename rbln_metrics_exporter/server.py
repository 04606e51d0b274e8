"""
Prometheus exposition endpoint.

Serves /metrics for a registry from a background thread.
"""

from prometheus_client import CollectorRegistry, start_http_server

from .logging import get_logger


logger = get_logger("server")


class MetricServer:
    """HTTP server publishing one registry."""

    def __init__(self, registry: CollectorRegistry, port: int, addr: str = "0.0.0.0"):
        self.registry = registry
        self.port = port
        self.addr = addr
        self._server = None
        self._thread = None

    def start(self) -> None:
        """Start serving; raises OSError if the port is taken."""
        self._server, self._thread = start_http_server(self.port, addr=self.addr, registry=self.registry)
        logger.info(f"Serving metrics on http://{self.addr}:{self.port}/metrics")

    def stop(self) -> None:
        """Shut the server down and wait for its thread."""
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        self._thread.join(timeout=5.0)
        self._server = None
        self._thread = None
