"""
Configuration schema with dataclasses for validation and type safety.

Each section reads its defaults from environment variables; command-line
options are applied on top by the loader.
"""

import socket
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from ..const import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_DAEMON_URL,
    DEFAULT_INTERVAL,
    DEFAULT_NODE_NAME,
    DEFAULT_PORT,
    POD_RESOURCES_SOCKET,
    RBLN_RESOURCE_PREFIX,
)
from ..daemon.client import InventoryMode


ENV_PREFIX = "RBLN_METRICS_EXPORTER_"

TRUE_VALUES = {"1", "true", "yes", "y", "on"}
FALSE_VALUES = {"0", "false", "no", "n", "off"}


class KubernetesMode(Enum):
    """Whether workload placement labels are exported."""
    AUTO = "auto"              # Detect from environment
    ON = "on"                  # Always
    OFF = "off"                # Never


def env_str(env: Mapping[str, str], key: str, default: str) -> str:
    """String from environment; empty values count as unset."""
    return env.get(key) or default


def env_int(env: Mapping[str, str], key: str, default: int) -> int:
    """Integer from environment; unparsable values fall back to default."""
    value = env.get(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def env_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    """Boolean from environment; unknown spellings fall back to default."""
    value = (env.get(key) or "").lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    return default


def detect_node_name(env: Mapping[str, str]) -> str:
    """NODE_NAME, else the hostname, else "unknown"."""
    if env.get("NODE_NAME"):
        return env["NODE_NAME"]
    return socket.gethostname() or DEFAULT_NODE_NAME


@dataclass
class DaemonConfig:
    """RBLN daemon connection configuration."""
    url: str = DEFAULT_DAEMON_URL
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    inventory_mode: str = InventoryMode.AGGREGATED.value

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> "DaemonConfig":
        return cls(
            url=env_str(env, f"{ENV_PREFIX}RBLN_DAEMON_URL", DEFAULT_DAEMON_URL),
            inventory_mode=env_str(env, f"{ENV_PREFIX}INVENTORY_MODE", InventoryMode.AGGREGATED.value),
        )


@dataclass
class ExporterConfig:
    """Collection and exposition configuration."""
    port: int = DEFAULT_PORT
    interval: int = DEFAULT_INTERVAL  # Seconds
    oneshot: bool = False
    node_name: str = DEFAULT_NODE_NAME

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> "ExporterConfig":
        return cls(
            port=env_int(env, f"{ENV_PREFIX}PORT", DEFAULT_PORT),
            interval=env_int(env, f"{ENV_PREFIX}INTERVAL", DEFAULT_INTERVAL),
            oneshot=env_bool(env, f"{ENV_PREFIX}ONESHOT", False),
            node_name=detect_node_name(env),
        )


@dataclass
class KubernetesConfig:
    """Workload placement configuration."""
    mode: str = KubernetesMode.AUTO.value
    pod_resources_socket: str = POD_RESOURCES_SOCKET
    resource_prefix: str = RBLN_RESOURCE_PREFIX

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> "KubernetesConfig":
        return cls(
            mode=env_str(env, f"{ENV_PREFIX}KUBERNETES_MODE", KubernetesMode.AUTO.value),
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "info"  # debug, info, warning, error
    format: str = "json"  # json, text
    file: str | None = None  # Log file path
    colors: bool = True  # Colored console output

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> "LoggingConfig":
        return cls(
            level=env_str(env, f"{ENV_PREFIX}LOG_LEVEL", "info"),
            format=env_str(env, f"{ENV_PREFIX}LOG_FORMAT", "json"),
            file=env.get(f"{ENV_PREFIX}LOG_FILE") or None,
        )


@dataclass
class Config:
    """Root configuration."""
    daemon: DaemonConfig = field(default_factory=DaemonConfig)
    exporter: ExporterConfig = field(default_factory=ExporterConfig)
    kubernetes: KubernetesConfig = field(default_factory=KubernetesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> "Config":
        """Create Config from environment variables."""
        return cls(
            daemon=DaemonConfig.from_env(env),
            exporter=ExporterConfig.from_env(env),
            kubernetes=KubernetesConfig.from_env(env),
            logging=LoggingConfig.from_env(env),
        )

    @property
    def inventory_mode(self) -> InventoryMode:
        return InventoryMode(self.daemon.inventory_mode)

    @property
    def kubernetes_mode(self) -> KubernetesMode:
        return KubernetesMode(self.kubernetes.mode)
