"""
Configuration loader with environment reading and validation.
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..const import DEFAULT_NODE_NAME, MAX_INTERVAL, MIN_INTERVAL
from ..daemon.client import InventoryMode, strip_scheme
from .schema import Config, KubernetesMode


class ConfigError(Exception):
    """Exception raised for configuration errors."""

    pass


# Override key -> (section, field)
OVERRIDES = {
    "rbln_daemon_url": ("daemon", "url"),
    "inventory_mode": ("daemon", "inventory_mode"),
    "port": ("exporter", "port"),
    "interval": ("exporter", "interval"),
    "oneshot": ("exporter", "oneshot"),
    "node_name": ("exporter", "node_name"),
    "kubernetes_mode": ("kubernetes", "mode"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
    "log_file": ("logging", "file"),
}


class ConfigLoader:
    """
    Builds and validates configuration.

    Environment variables provide defaults; explicit overrides (from the
    command line) win.

    Usage:
        loader = ConfigLoader()
        config = loader.load(overrides={"port": 9100})
        warnings = loader.validate(config)
    """

    def load(
        self,
        env: Mapping[str, str] | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> Config:
        """
        Load configuration.

        Args:
            env: Environment mapping (os.environ if None)
            overrides: Option name -> value; None values are ignored

        Returns:
            Normalized Config object

        Raises:
            ConfigError: If a value is out of range or unknown
        """
        config = Config.from_env(os.environ if env is None else env)

        for key, value in (overrides or {}).items():
            if value is None:
                continue
            if key not in OVERRIDES:
                raise ConfigError(f"Unknown option: {key}")
            section, name = OVERRIDES[key]
            setattr(getattr(config, section), name, value)

        return self._finalize(config)

    def _finalize(self, config: Config) -> Config:
        interval = config.exporter.interval
        if not MIN_INTERVAL <= interval <= MAX_INTERVAL:
            raise ConfigError(f"interval must be {MIN_INTERVAL}-{MAX_INTERVAL} seconds, got {interval}")

        if not 0 < config.exporter.port < 65536:
            raise ConfigError(f"port must be 1-65535, got {config.exporter.port}")

        config.kubernetes.mode = config.kubernetes.mode.lower()
        modes = [mode.value for mode in KubernetesMode]
        if config.kubernetes.mode not in modes:
            raise ConfigError(f"kubernetes-mode must be one of {', '.join(modes)}")

        config.daemon.inventory_mode = config.daemon.inventory_mode.lower()
        inventory_modes = [mode.value for mode in InventoryMode]
        if config.daemon.inventory_mode not in inventory_modes:
            raise ConfigError(f"inventory-mode must be one of {', '.join(inventory_modes)}")

        config.logging.format = config.logging.format.lower()
        if config.logging.format not in ("text", "json"):
            raise ConfigError("log-format must be one of text, json")

        config.daemon.url = strip_scheme(config.daemon.url)
        return config

    def validate(self, config: Config) -> list[str]:
        """
        Check configuration for likely mistakes.

        Returns:
            List of warning messages (empty if none)
        """
        warnings = []

        socket_path = config.kubernetes.pod_resources_socket
        if config.kubernetes_mode == KubernetesMode.ON and not Path(socket_path).exists():
            warnings.append(
                f"kubernetes-mode is on but {socket_path} does not exist; "
                "placement labels will stay empty"
            )

        if config.exporter.node_name == DEFAULT_NODE_NAME:
            warnings.append("Could not determine node name; set NODE_NAME or --node-name")

        return warnings
