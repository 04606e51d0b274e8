"""
Async client for the RBLN hardware daemon.

Builds one inventory of DeviceRecords per call. Two strategies exist:

- aggregated: device list stream + GetTotalInfo stream, merged by UUID
- per_device: device list stream, then HW/memory/utilization/version
  calls for every device in parallel, plus GetTotalInfo for health

Both strategies zero-fill: a device present in the serviceable list is
always part of the inventory, even when no telemetry could be fetched
for it.
"""

import asyncio
from collections.abc import Mapping
from enum import Enum
from typing import Any

import grpc

from ..errors import DaemonConnectionError, InventoryUnavailableError
from ..logging import get_logger
from ..models.device import CARD_NAMES, DeviceRecord, card_name
from ..protos import rbln_services as pb


logger = get_logger("daemon.client")


class InventoryMode(Enum):
    """How per-device telemetry is fetched."""
    AGGREGATED = "aggregated"  # One GetTotalInfo stream for all devices
    PER_DEVICE = "per_device"  # Four unary calls per device


def strip_scheme(endpoint: str) -> str:
    """Drop a leading http:// or https:// kept for backward compatibility."""
    for prefix in ("http://", "https://"):
        if endpoint.startswith(prefix):
            return endpoint[len(prefix):]
    return endpoint


class DeviceTelemetryClient:
    """
    Stateless inventory client for the RBLN daemon.

    Holds only the gRPC channel; nothing is cached between inventory()
    calls.
    """

    def __init__(
        self,
        channel: grpc.aio.Channel | None,
        stub: Any = None,
        card_names: Mapping[str, str] = CARD_NAMES,
        mode: InventoryMode = InventoryMode.AGGREGATED,
    ):
        """
        Initialize client.

        Args:
            channel: Open gRPC channel (None when a stub is injected)
            stub: RBLNServicesStub or a compatible object
            card_names: Device-id -> card model table
            mode: Inventory strategy
        """
        self._channel = channel
        self._stub = stub if stub is not None else pb.RBLNServicesStub(channel)
        self.card_names = card_names
        self.mode = mode

    @classmethod
    async def connect(
        cls,
        endpoint: str,
        timeout: float = 10.0,
        card_names: Mapping[str, str] = CARD_NAMES,
        mode: InventoryMode = InventoryMode.AGGREGATED,
    ) -> "DeviceTelemetryClient":
        """
        Open a channel to the daemon and wait until it is ready.

        Args:
            endpoint: host:port of the daemon gRPC server
            timeout: Seconds to wait for the channel
            card_names: Device-id -> card model table
            mode: Inventory strategy

        Returns:
            Connected client

        Raises:
            DaemonConnectionError: If the daemon is unreachable
        """
        endpoint = strip_scheme(endpoint)
        logger.debug(f"Connecting to rbln-daemon at {endpoint}")

        channel = grpc.aio.insecure_channel(endpoint)
        try:
            await asyncio.wait_for(channel.channel_ready(), timeout=timeout)
        except asyncio.TimeoutError:
            await channel.close()
            raise DaemonConnectionError(endpoint, f"not ready after {timeout:.0f}s") from None
        except grpc.RpcError as e:
            await channel.close()
            raise DaemonConnectionError(endpoint, str(e)) from e

        logger.info(f"Connected to rbln-daemon at {endpoint} ({mode.value} inventory)")
        return cls(channel, card_names=card_names, mode=mode)

    async def close(self) -> None:
        """Close the gRPC channel."""
        if self._channel is not None:
            await self._channel.close()
            self._channel = None

    async def inventory(self) -> list[DeviceRecord]:
        """
        Fetch the current device inventory.

        Returns:
            One DeviceRecord per serviceable device

        Raises:
            InventoryUnavailableError: If a foundational stream fails
        """
        devices = await self._read_stream("GetServiceableDeviceList")
        records = [self._identity(device) for device in devices]

        if self.mode == InventoryMode.PER_DEVICE:
            await self._fill_per_device(devices, records)
        else:
            infos = await self._read_stream("GetTotalInfo")
            self._fill_aggregated(records, infos)

        logger.debug(f"Inventory: {len(records)} devices")
        return records

    async def _read_stream(self, method: str) -> list[Any]:
        """Drain a server-streaming call with an Empty request."""
        call = getattr(self._stub, method)
        items = []
        try:
            async for item in call(pb.Empty()):
                items.append(item)
        except grpc.RpcError as e:
            logger.warning(f"{method} stream failed: {_describe(e)}")
            raise InventoryUnavailableError(method, _describe(e)) from e
        return items

    def _identity(self, device: Any) -> DeviceRecord:
        return DeviceRecord(
            uuid=device.uuid,
            name=device.name,
            device_id=device.dev_id,
            card=card_name(device.dev_id, self.card_names),
        )

    @staticmethod
    def _fill_aggregated(records: list[DeviceRecord], infos: list[Any]) -> None:
        """Merge aggregated telemetry into identity records by UUID."""
        by_uuid = {info.uuid: info for info in infos}

        for record in records:
            info = by_uuid.get(record.uuid)
            if info is None:
                logger.debug(f"No telemetry for {record.name} ({record.uuid})")
                continue

            record.temperature = info.temperature
            record.power = info.watt
            record.dram_total_gib = info.total_mem
            record.dram_used_gib = info.used_mem
            record.utilization = info.utilization
            record.driver_version = info.drv_version
            record.firmware_version = info.fw_version
            record.smc_version = info.smc_version
            record.status = info.err_status

    async def _fill_per_device(self, devices: list[Any], records: list[DeviceRecord]) -> None:
        """Fan out the four detail calls per device and join them all."""
        await asyncio.gather(*(
            self._fetch_details(device, record)
            for device, record in zip(devices, records)
        ))

        # Health is only available from the aggregated stream
        try:
            infos = await self._read_stream("GetTotalInfo")
        except InventoryUnavailableError:
            return

        status_by_uuid = {info.uuid: info.err_status for info in infos}
        for record in records:
            record.status = status_by_uuid.get(record.uuid, 0)

    async def _fetch_details(self, device: Any, record: DeviceRecord) -> None:
        methods = ("GetHWInfo", "GetMemoryInfo", "GetUtilization", "GetVersion")
        results = await asyncio.gather(
            *(getattr(self._stub, method)(device) for method in methods),
            return_exceptions=True,
        )

        for method, result in zip(methods, results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, BaseException):
                logger.error(f"{method} failed for {device.name}: {_describe(result)}")
                continue

            if method == "GetHWInfo":
                record.temperature = result.temperature
                record.power = result.watt
            elif method == "GetMemoryInfo":
                record.dram_total_gib = result.total_mem
                record.dram_used_gib = result.used_mem
            elif method == "GetUtilization":
                record.utilization = result.utilization
            elif method == "GetVersion":
                record.driver_version = result.drv_version
                record.firmware_version = result.fw_version
                record.smc_version = result.smc_version


def _describe(error: BaseException) -> str:
    """Short description of an RPC error."""
    if isinstance(error, grpc.aio.AioRpcError):
        return f"{error.code().name}: {error.details()}"
    return str(error) or error.__class__.__name__
