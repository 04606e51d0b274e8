"""
Tests for the collection scheduler.
"""

import asyncio

import pytest

from rbln_metrics_exporter.errors import CycleTimeoutError, InventoryUnavailableError, MetricUpdateError
from rbln_metrics_exporter.scheduler import CollectionScheduler, default_cycle_timeout

from fakes import FakeCache, FakeInventoryClient, binding, record


def temperature(registry, name: str = "rbln0", uuid: str = "a"):
    for family in registry.collect():
        for sample in family.samples:
            if sample.name == "RBLN_DEVICE_STATUS:TEMPERATURE" and sample.labels["name"] == name:
                return sample.value
    return None


class ExplodingSet:
    """Metric family whose update fails."""

    FAMILY = "exploding"

    def reset(self) -> None:
        pass

    def update(self, devices, placements) -> None:
        raise RuntimeError("boom")


@pytest.mark.asyncio
async def test_cycle_updates_every_family(registry, metric_sets) -> None:
    client = FakeInventoryClient([record(temperature=40.0, utilization=5.0)])
    scheduler = CollectionScheduler(client, metric_sets, interval=5.0)

    await scheduler.run_once()

    assert temperature(registry) == 40.0
    assert client.calls == 1


@pytest.mark.asyncio
async def test_one_snapshot_per_cycle(registry, pod_metric_sets) -> None:
    cache = FakeCache({"rbln0": binding("train", "ml", "worker")})
    scheduler = CollectionScheduler(FakeInventoryClient([record()]), pod_metric_sets, cache=cache)

    await scheduler.run_once()

    assert cache.triggers == 1
    assert cache.snapshots == 1
    pods = {
        sample.labels["pod"]
        for family in registry.collect()
        for sample in family.samples
    }
    assert pods == {"train"}


@pytest.mark.asyncio
async def test_inventory_failure_keeps_previous_values(registry, metric_sets) -> None:
    client = FakeInventoryClient(
        [record(temperature=40.0)],
        InventoryUnavailableError("GetTotalInfo", "UNAVAILABLE"),
    )
    scheduler = CollectionScheduler(client, metric_sets)

    await scheduler.run_once()
    with pytest.raises(InventoryUnavailableError):
        await scheduler.run_once()

    assert temperature(registry) == 40.0


@pytest.mark.asyncio
async def test_failing_family_aborts_cycle(registry, metric_sets) -> None:
    hardware, health, memory, utilization = metric_sets
    client = FakeInventoryClient([record(temperature=40.0)], [record(temperature=50.0)])
    scheduler = CollectionScheduler(client, [hardware, ExplodingSet(), utilization])

    with pytest.raises(MetricUpdateError) as exc_info:
        await scheduler.run_once()

    assert exc_info.value.family == "exploding"
    assert "RuntimeError: boom" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, RuntimeError)

    # Families before the failure were refreshed; later ones were not touched
    assert temperature(registry) == 40.0
    assert registry.get_sample_value(
        "RBLN_DEVICE_STATUS:UTILIZATION",
        {
            "card": "RBLN-CA02", "name": "rbln0", "uuid": "a", "deviceID": "1020",
            "hostname": "node1", "driver_version": "", "firmware_version": "",
        },
    ) is None


@pytest.mark.asyncio
async def test_slow_cycle_times_out(metric_sets) -> None:
    client = FakeInventoryClient([record()], delay=1.0)
    scheduler = CollectionScheduler(client, metric_sets, interval=1.0, cycle_timeout=0.05)

    with pytest.raises(CycleTimeoutError):
        await scheduler.run_once()


@pytest.mark.asyncio
async def test_loop_survives_failures(registry, metric_sets) -> None:
    client = FakeInventoryClient(
        InventoryUnavailableError("GetServiceableDeviceList", "UNAVAILABLE"),
        [record(temperature=42.0)],
    )
    scheduler = CollectionScheduler(client, metric_sets, interval=0.05)

    task = asyncio.create_task(scheduler.run())
    try:
        await asyncio.sleep(0.2)
    finally:
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)

    assert scheduler.failures == 1
    assert scheduler.cycles >= 2
    assert temperature(registry) == 42.0


def test_timeout_must_be_below_interval(metric_sets) -> None:
    with pytest.raises(ValueError):
        CollectionScheduler(FakeInventoryClient([]), metric_sets, interval=1.0, cycle_timeout=1.0)


@pytest.mark.parametrize("interval,expected", [
    (1.0, 0.8),
    (5.0, 4.0),
    (10.0, 5.0),
    (60.0, 5.0),
])
def test_default_cycle_timeout(interval: float, expected: float) -> None:
    assert default_cycle_timeout(interval) == pytest.approx(expected)


@pytest.mark.asyncio
async def test_next_cycle_runs_after_family_failure(registry, metric_sets, caplog) -> None:
    exploding = ExplodingSet()
    scheduler = CollectionScheduler(
        FakeInventoryClient([record(temperature=40.0)]),
        [exploding] + metric_sets,
        interval=0.05,
    )

    task = asyncio.create_task(scheduler.run())
    try:
        await asyncio.sleep(0.03)
        assert scheduler.failures == 1
        assert "Updating exploding metrics failed" in caplog.text

        scheduler.metric_sets.remove(exploding)
        await asyncio.sleep(0.1)
    finally:
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)

    assert scheduler.cycles >= 1
    assert temperature(registry) == 40.0
