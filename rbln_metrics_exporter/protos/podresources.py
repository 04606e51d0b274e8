"""
Kubelet pod-resources v1alpha1 schema and client stub.

Only the List call is used. Field numbers follow
k8s.io/kubelet/pkg/apis/podresources/v1alpha1/api.proto; the classes are
generated from kubelet_podresources_v1alpha1.proto at import time.
"""

import grpc


PROTO_PATH = "rbln_metrics_exporter/protos/kubelet_podresources_v1alpha1.proto"

_protos, _services = grpc.protos_and_services(PROTO_PATH)

DESCRIPTOR = _protos.DESCRIPTOR
SERVICE = DESCRIPTOR.services_by_name["PodResourcesLister"].full_name

ListPodResourcesRequest = _protos.ListPodResourcesRequest
ListPodResourcesResponse = _protos.ListPodResourcesResponse
PodResources = _protos.PodResources
ContainerResources = _protos.ContainerResources
ContainerDevices = _protos.ContainerDevices

PodResourcesListerStub = _services.PodResourcesListerStub
