"""
Application constants and metadata.
"""

# Application info
APP_NAME = "RBLN Metrics Exporter"
APP_VERSION = "0.1.0"

# Default values
DEFAULT_DAEMON_URL = "127.0.0.1:50051"
DEFAULT_PORT = 9090
DEFAULT_INTERVAL = 5
MIN_INTERVAL = 1
MAX_INTERVAL = 60
DEFAULT_CYCLE_TIMEOUT = 5.0
DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_NODE_NAME = "unknown"

# Kubernetes integration
POD_RESOURCES_SOCKET = "/var/lib/kubelet/pod-resources/kubelet.sock"
POD_RESOURCES_TIMEOUT = 10.0
RBLN_RESOURCE_PREFIX = "rebellions.ai"
SYSFS_DRIVER_POOLS = "/sys/bus/pci/drivers/rebellions/{pci_address}/pools"

# Exported metric family prefix
METRIC_PREFIX = "RBLN_DEVICE_STATUS"
