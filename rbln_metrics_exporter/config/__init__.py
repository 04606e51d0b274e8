"""
Configuration from environment variables and command-line options.
"""

from .loader import ConfigError, ConfigLoader
from .schema import Config, KubernetesMode

__all__ = [
    "Config",
    "ConfigError",
    "ConfigLoader",
    "KubernetesMode",
]
