"""
Workload placement cache.

Maintains an eventually-consistent map from device name to the pod,
namespace and container holding it. Refreshes run in a background task,
triggered explicitly and coalesced: while one request is pending, further
triggers are dropped.
"""

import asyncio
import os
import threading
from collections.abc import Callable
from pathlib import Path

from .const import POD_RESOURCES_SOCKET, RBLN_RESOURCE_PREFIX
from .logging import get_logger
from .models.placement import PlacementBinding, Placements
from .utils.podresources import PodClaims, PodResourcesClient
from .utils.sysfs import resolve_device_name


logger = get_logger("placement")


def is_kubernetes(socket_path: str = POD_RESOURCES_SOCKET) -> bool:
    """Detect whether the exporter runs on a Kubernetes node."""
    if os.environ.get("KUBERNETES_SERVICE_HOST"):
        return True
    return Path(socket_path).exists()


def build_placements(
    pods: list[PodClaims],
    resolver: Callable[[str], str],
    resource_prefix: str = RBLN_RESOURCE_PREFIX,
) -> Placements:
    """
    Build a fresh device -> binding map from a pod-resources listing.

    Args:
        pods: Pod claims from the kubelet
        resolver: Maps a claimed device identifier to a device name
        resource_prefix: Only resources with this prefix are considered

    Returns:
        New placement map

    Raises:
        DeviceResolutionError: If any claimed device cannot be resolved
    """
    placements: Placements = {}
    for pod in pods:
        for container in pod.containers:
            for claim in container.devices:
                if not claim.resource_name.startswith(resource_prefix):
                    continue
                for device_id in claim.device_ids:
                    placements[resolver(device_id)] = PlacementBinding(
                        pod=pod.name,
                        namespace=pod.namespace,
                        container=container.name,
                    )
    return placements


class WorkloadResourceCache:
    """
    Background cache of device placements.

    snapshot() always returns a copy; refreshes replace the whole map so
    devices no longer claimed disappear immediately.
    """

    def __init__(
        self,
        lister: PodResourcesClient,
        resolver: Callable[[str], str] = resolve_device_name,
        resource_prefix: str = RBLN_RESOURCE_PREFIX,
    ):
        """
        Initialize cache.

        Args:
            lister: Source of pod resource listings
            resolver: Device identifier -> device name
            resource_prefix: Resource name prefix of RBLN devices
        """
        self.lister = lister
        self.resolver = resolver
        self.resource_prefix = resource_prefix

        self._placements: Placements = {}
        self._lock = threading.Lock()
        self._sync_requests: asyncio.Queue[None] = asyncio.Queue(maxsize=1)
        self._task: asyncio.Task | None = None
        self._sync_count = 0

    @property
    def sync_count(self) -> int:
        """Number of completed refreshes."""
        return self._sync_count

    async def start(self) -> None:
        """Run a best-effort initial refresh and start the background loop."""
        try:
            await self.sync()
        except Exception as e:
            logger.warning(f"Initial pod resource sync failed: {e}")

        self._task = asyncio.create_task(self._run_sync_loop(), name="placement-sync")

    async def stop(self) -> None:
        """Stop the background loop."""
        if self._task is None:
            return

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    def trigger_sync(self) -> None:
        """Request a refresh; dropped if one is already pending."""
        try:
            self._sync_requests.put_nowait(None)
        except asyncio.QueueFull:
            pass

    def snapshot(self) -> Placements:
        """Point-in-time copy of the placement map."""
        with self._lock:
            return dict(self._placements)

    async def sync(self) -> None:
        """
        Refresh the placement map.

        The listing and resolution happen before the lock is taken; on any
        failure the previous map stays in place.
        """
        pods = await self.lister.list_pods()
        placements = build_placements(pods, self.resolver, self.resource_prefix)

        with self._lock:
            self._placements = placements
        self._sync_count += 1

        logger.debug(f"Pod resources synced: {len(placements)} bound devices")

    async def _run_sync_loop(self) -> None:
        while True:
            await self._sync_requests.get()
            try:
                await self.sync()
            except Exception as e:
                logger.warning(f"Failed to sync pod resources: {e}")
