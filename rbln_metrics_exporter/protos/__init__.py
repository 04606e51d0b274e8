"""
gRPC schemas for the RBLN daemon and the kubelet pod-resources API.

The .proto files in this package are compiled when the schema modules are
imported, so the package directory's parent must be on sys.path (true for
both regular and editable installs).
"""
