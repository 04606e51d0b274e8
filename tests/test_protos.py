"""
Tests for the gRPC schema modules generated from the shipped .proto files.
"""

import pytest

from rbln_metrics_exporter.protos import podresources, rbln_services


def fields(message) -> dict[str, int]:
    return {field.name: field.number for field in message.DESCRIPTOR.fields}


class TestRBLNServices:
    def test_service_name(self) -> None:
        assert rbln_services.SERVICE == "rbln_services.RBLNServices"

    @pytest.mark.parametrize("method,streaming", [
        ("GetServiceableDeviceList", True),
        ("GetTotalInfo", True),
        ("GetHWInfo", False),
        ("GetMemoryInfo", False),
        ("GetUtilization", False),
        ("GetVersion", False),
    ])
    def test_methods(self, method: str, streaming: bool) -> None:
        service = rbln_services.DESCRIPTOR.services_by_name["RBLNServices"]

        assert service.methods_by_name[method].server_streaming is streaming

    def test_device_info_fields(self) -> None:
        assert fields(rbln_services.DeviceInfo) == {
            "uuid": 1, "name": 2, "dev_id": 3,
            "temperature": 4, "watt": 5, "total_mem": 6, "used_mem": 7, "utilization": 8,
            "drv_version": 9, "fw_version": 10, "smc_version": 11, "err_status": 12,
        }

    def test_wire_round_trip(self) -> None:
        device = rbln_services.Device(uuid="a", name="rbln0", dev_id="1020")

        assert rbln_services.Device.FromString(device.SerializeToString()) == device


class TestPodResources:
    def test_service_name(self) -> None:
        assert podresources.SERVICE == "v1alpha1.PodResourcesLister"

    def test_nested_fields(self) -> None:
        assert fields(podresources.PodResources) == {"name": 1, "namespace": 2, "containers": 3}
        assert fields(podresources.ContainerDevices) == {"resource_name": 1, "device_ids": 2}
