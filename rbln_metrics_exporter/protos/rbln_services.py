"""
RBLN daemon gRPC schema and client stub.

Message and stub classes are generated from rbln_services.proto by
grpcio-tools when this module is imported.
"""

import grpc


PROTO_PATH = "rbln_metrics_exporter/protos/rbln_services.proto"

_protos, _services = grpc.protos_and_services(PROTO_PATH)

DESCRIPTOR = _protos.DESCRIPTOR
SERVICE = DESCRIPTOR.services_by_name["RBLNServices"].full_name

Empty = _protos.Empty
Device = _protos.Device
HWInfo = _protos.HWInfo
MemoryInfo = _protos.MemoryInfo
UtilInfo = _protos.UtilInfo
VersionInfo = _protos.VersionInfo
DeviceInfo = _protos.DeviceInfo

RBLNServicesStub = _services.RBLNServicesStub
RBLNServicesServicer = _services.RBLNServicesServicer
add_RBLNServicesServicer_to_server = _services.add_RBLNServicesServicer_to_server
