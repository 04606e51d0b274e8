"""
Collection scheduler.

Drives fixed-interval collection cycles. A cycle triggers a placement
refresh, fetches one inventory, takes one placement snapshot and feeds
both to every metric family in order. Cycles are bounded by a timeout
shorter than the interval and never overlap; a failed cycle is logged
and the loop carries on.
"""

import asyncio
import time

from .const import DEFAULT_CYCLE_TIMEOUT
from .collectors.base import MetricSet
from .daemon.client import DeviceTelemetryClient
from .errors import CycleTimeoutError, MetricUpdateError
from .logging import get_logger
from .placement import WorkloadResourceCache


logger = get_logger("scheduler")


def default_cycle_timeout(interval: float) -> float:
    """Cycle bound: at most DEFAULT_CYCLE_TIMEOUT, always below the interval."""
    return min(DEFAULT_CYCLE_TIMEOUT, interval * 0.8)


class CollectionScheduler:
    """Runs collection cycles at a fixed period."""

    def __init__(
        self,
        client: DeviceTelemetryClient,
        metric_sets: list[MetricSet],
        cache: WorkloadResourceCache | None = None,
        interval: float = 5.0,
        cycle_timeout: float | None = None,
    ):
        """
        Initialize scheduler.

        Args:
            client: Daemon inventory client
            metric_sets: Metric families, updated in list order
            cache: Placement cache (None when workload labels are off)
            interval: Seconds between cycle starts
            cycle_timeout: Bound of one cycle (derived from interval if None)
        """
        if cycle_timeout is None:
            cycle_timeout = default_cycle_timeout(interval)
        if cycle_timeout >= interval:
            raise ValueError(f"cycle timeout {cycle_timeout}s must be shorter than interval {interval}s")

        self.client = client
        self.metric_sets = metric_sets
        self.cache = cache
        self.interval = interval
        self.cycle_timeout = cycle_timeout

        self.cycles = 0  # successful
        self.failures = 0

    async def run_once(self) -> None:
        """
        Run a single bounded collection cycle.

        Raises:
            CycleTimeoutError: If the cycle exceeds its bound
            MetricUpdateError: If a metric family fails to update
            ExporterError: If the inventory could not be fetched
        """
        try:
            await asyncio.wait_for(self._collect(), timeout=self.cycle_timeout)
        except asyncio.TimeoutError:
            raise CycleTimeoutError(self.cycle_timeout) from None

    async def _collect(self) -> None:
        if self.cache is not None:
            self.cache.trigger_sync()

        devices = await self.client.inventory()
        placements = self.cache.snapshot() if self.cache is not None else {}

        for metric_set in self.metric_sets:
            metric_set.reset()
            try:
                metric_set.update(devices, placements)
            except Exception as e:
                raise MetricUpdateError(metric_set.FAMILY, f"{e.__class__.__name__}: {e}") from e

        logger.debug(f"Updated {len(self.metric_sets)} metric families for {len(devices)} devices")

    async def run(self) -> None:
        """Run cycles until cancelled."""
        logger.info(f"Starting collection (interval: {self.interval}s, timeout: {self.cycle_timeout}s)")

        next_tick = time.monotonic()
        while True:
            try:
                await self.run_once()
                self.cycles += 1
            except Exception as e:
                self.failures += 1
                logger.warning(f"Collect metrics failed: {e}")

            # Skip ticks missed by a slow cycle rather than running back to back
            next_tick += self.interval
            now = time.monotonic()
            if next_tick <= now:
                missed = int((now - next_tick) // self.interval) + 1
                next_tick += missed * self.interval

            await asyncio.sleep(next_tick - now)
