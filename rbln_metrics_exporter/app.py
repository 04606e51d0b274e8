"""
Main application orchestrator.

Handles:
- Daemon connection
- Placement cache and metric families
- Collection scheduling
- HTTP exposition
- Graceful shutdown
"""

import asyncio
import signal
import sys

from prometheus_client import CollectorRegistry, generate_latest

from .collectors import MetricSet, create_metric_sets
from .config.schema import Config, KubernetesMode
from .const import APP_NAME, APP_VERSION
from .daemon.client import DeviceTelemetryClient
from .logging import get_logger
from .placement import WorkloadResourceCache, is_kubernetes
from .scheduler import CollectionScheduler
from .server import MetricServer
from .utils.podresources import PodResourcesClient
from .utils.sysfs import resolve_device_name


logger = get_logger("app")


def placement_labels_enabled(config: Config) -> bool:
    """Resolve the kubernetes mode to a yes/no decision."""
    mode = config.kubernetes_mode
    if mode == KubernetesMode.AUTO:
        return is_kubernetes(config.kubernetes.pod_resources_socket)
    return mode == KubernetesMode.ON


class Application:
    """
    Main application class.

    Wires the daemon client, placement cache, metric families, scheduler
    and HTTP server together.
    """

    def __init__(self, config: Config):
        """
        Initialize application.

        Args:
            config: Application configuration
        """
        self.config = config
        self.registry = CollectorRegistry()
        self.include_pod_labels = placement_labels_enabled(config)

        self.client: DeviceTelemetryClient | None = None
        self.cache: WorkloadResourceCache | None = None
        self.metric_sets: list[MetricSet] = []
        self.scheduler: CollectionScheduler | None = None
        self.server: MetricServer | None = None

        self._task: asyncio.Task | None = None
        self._shutdown_event = asyncio.Event()

    async def _setup(self) -> None:
        """Connect the daemon and build the collection pipeline."""
        # Fatal: nothing to serve without the daemon
        self.client = await DeviceTelemetryClient.connect(
            self.config.daemon.url,
            timeout=self.config.daemon.connect_timeout,
            mode=self.config.inventory_mode,
        )

        if self.include_pod_labels:
            self.cache = WorkloadResourceCache(
                PodResourcesClient(self.config.kubernetes.pod_resources_socket),
                resolver=resolve_device_name,
                resource_prefix=self.config.kubernetes.resource_prefix,
            )
            await self.cache.start()
            logger.info("Workload placement labels enabled")

        self.metric_sets = create_metric_sets(
            self.registry,
            hostname=self.config.exporter.node_name,
            include_pod_labels=self.include_pod_labels,
        )
        logger.info(f"Created {len(self.metric_sets)} metric families")

        self.scheduler = CollectionScheduler(
            self.client,
            self.metric_sets,
            cache=self.cache,
            interval=float(self.config.exporter.interval),
        )

    def _setup_signal_handlers(self) -> None:
        """Setup signal handlers for graceful shutdown."""
        loop = asyncio.get_running_loop()

        for sig in (signal.SIGTERM, signal.SIGINT, signal.SIGQUIT):
            loop.add_signal_handler(sig, self._signal_handler)

    def _signal_handler(self) -> None:
        """Handle shutdown signals."""
        logger.info("Received shutdown signal")
        self._shutdown_event.set()

    async def run_oneshot(self) -> bool:
        """
        Collect once and write the exposition text to stdout.

        Returns:
            True if the cycle succeeded
        """
        try:
            await self._setup()
            try:
                await self.scheduler.run_once()
            except Exception as e:
                logger.error(f"Collection failed: {e}")
                return False

            sys.stdout.write(generate_latest(self.registry).decode())
            sys.stdout.flush()
            return True
        finally:
            await self.stop()

    async def start(self) -> None:
        """Start the application and block until shutdown."""
        logger.info(f"Starting {APP_NAME} {APP_VERSION}")

        try:
            await self._setup()

            self.server = MetricServer(self.registry, self.config.exporter.port)
            self.server.start()

            self._setup_signal_handlers()
            self._task = asyncio.create_task(self.scheduler.run(), name="collection")

            logger.info(f"{APP_NAME} started successfully")
            await self._shutdown_event.wait()
        finally:
            await self.stop()

    async def stop(self) -> None:
        """Stop the application."""
        logger.info(f"Stopping {APP_NAME}")

        if self._task is not None:
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)
            self._task = None

        if self.server is not None:
            self.server.stop()
            self.server = None

        if self.cache is not None:
            await self.cache.stop()

        if self.client is not None:
            await self.client.close()
            self.client = None

        logger.info(f"{APP_NAME} stopped")


async def run_app(config: Config) -> bool:
    """
    Run the application with a loaded configuration.

    Args:
        config: Application configuration

    Returns:
        True on clean exit
    """
    logger.debug(f"Daemon: {config.daemon.url} ({config.daemon.inventory_mode})")
    logger.debug(f"Node: {config.exporter.node_name}, interval: {config.exporter.interval}s")

    app = Application(config)
    if config.exporter.oneshot:
        return await app.run_oneshot()

    await app.start()
    return True
