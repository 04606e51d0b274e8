"""
Kubelet pod-resources API client via Unix socket.

Lists, per pod and container, the device plugin resources the kubelet
has handed out on this node.
"""

from dataclasses import dataclass, field
from pathlib import Path

import grpc

from ..const import POD_RESOURCES_SOCKET, POD_RESOURCES_TIMEOUT
from ..errors import PodResourcesError
from ..protos import podresources as pb


@dataclass
class DeviceClaim:
    """Devices of one resource assigned to a container."""

    resource_name: str
    device_ids: list[str] = field(default_factory=list)


@dataclass
class ContainerClaims:
    """Device claims of one container."""

    name: str
    devices: list[DeviceClaim] = field(default_factory=list)


@dataclass
class PodClaims:
    """Device claims of one pod."""

    name: str
    namespace: str
    containers: list[ContainerClaims] = field(default_factory=list)


class PodResourcesClient:
    """
    Async kubelet pod-resources client.

    A channel is opened per listing and closed afterwards, so a kubelet
    restart never leaves a stale connection behind.
    """

    def __init__(
        self,
        socket_path: str = POD_RESOURCES_SOCKET,
        timeout: float = POD_RESOURCES_TIMEOUT,
    ):
        """
        Initialize pod-resources client.

        Args:
            socket_path: Path to the kubelet pod-resources socket
            timeout: Deadline for one List call in seconds
        """
        self.socket_path = socket_path
        self.timeout = timeout

    @property
    def available(self) -> bool:
        """Check if the kubelet socket exists."""
        return Path(self.socket_path).exists()

    async def list_pods(self) -> list[PodClaims]:
        """
        List device claims of all pods on the node.

        Returns:
            List of PodClaims

        Raises:
            PodResourcesError: If the socket is missing or the call fails
        """
        if not self.available:
            raise PodResourcesError(f"kubelet pod-resources socket unavailable: {self.socket_path}")

        async with grpc.aio.insecure_channel(f"unix://{self.socket_path}") as channel:
            stub = pb.PodResourcesListerStub(channel)
            try:
                response = await stub.List(pb.ListPodResourcesRequest(), timeout=self.timeout)
            except grpc.RpcError as e:
                raise PodResourcesError(f"failed to list pod resources: {e}") from e

        return parse_response(response)


def parse_response(response: "pb.ListPodResourcesResponse") -> list[PodClaims]:
    """Convert a ListPodResourcesResponse into plain dataclasses."""
    pods = []
    for pod in response.pod_resources:
        containers = []
        for container in pod.containers:
            containers.append(ContainerClaims(
                name=container.name,
                devices=[
                    DeviceClaim(
                        resource_name=device.resource_name,
                        device_ids=list(device.device_ids),
                    )
                    for device in container.devices
                ],
            ))
        pods.append(PodClaims(
            name=pod.name,
            namespace=pod.namespace,
            containers=containers,
        ))
    return pods
