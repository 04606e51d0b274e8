"""
Logging configuration for the RBLN Metrics Exporter.

Features:
- JSON lines with source location (default), for node log collectors
- Human-readable console output with optional colors
- File output with rotation
- Quiet gRPC internals
"""

import json
import logging
import logging.handlers
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path


ROOT_LOGGER = "rbln_metrics_exporter"

RESET = "\033[0m"

# Log level colors
LEVEL_COLORS = {
    logging.DEBUG: "\033[2;36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;91m",
}

# Component colors, matched against the logger name after the root prefix
COMPONENT_COLORS = {
    "daemon": "\033[34m",
    "placement": "\033[94m",
    "scheduler": "\033[36m",
    "config": "\033[35m",
}


class TextFormatter(logging.Formatter):
    """
    Fixed-width text lines, optionally colored.

    The record is never modified, so other handlers see the original.
    """

    def __init__(self, fmt: str, datefmt: str | None = None, use_colors: bool = False):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def formatMessage(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().formatMessage(record)

        values = dict(record.__dict__)
        level_color = LEVEL_COLORS.get(record.levelno, "")
        values["levelname"] = f"{level_color}{record.levelname:8}{RESET}"

        component = record.name.removeprefix(f"{ROOT_LOGGER}.").split(".")[0]
        if component in COMPONENT_COLORS:
            values["name"] = f"{COMPONENT_COLORS[component]}{record.name}{RESET}"

        if record.levelno >= logging.WARNING:
            values["message"] = f"{level_color}{record.message}{RESET}"

        return self._style._fmt % values


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line.

    Keys: time (RFC 3339), level, logger, msg, source, and exc when the
    record carries exception info.
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload = {
            "time": timestamp.isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "source": f"{record.pathname}:{record.lineno}",
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "INFO"
    json: bool = True
    colors: bool = True  # Text console only, and only on a TTY

    # Optional rotating file, same format as the console
    file_path: str | None = None
    file_level: str = "DEBUG"
    file_max_bytes: int = 10 * 1024 * 1024  # 10 MB
    file_backup_count: int = 5

    text_format: str = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    def formatter(self, stream=None) -> logging.Formatter:
        """Formatter for a handler writing to stream (None for files)."""
        if self.json:
            return JsonFormatter()
        use_colors = self.colors and stream is not None and stream.isatty()
        return TextFormatter(self.text_format, self.date_format, use_colors=use_colors)


def get_log_level(level_str: str) -> int:
    """Convert string log level to logging constant."""
    levels = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "warn": logging.WARNING,
        "error": logging.ERROR,
        "critical": logging.CRITICAL,
    }
    return levels.get(level_str.lower(), logging.INFO)


def setup_logging(config: LogConfig | None = None) -> None:
    """
    Configure the package logger.

    Args:
        config: Logging configuration (uses defaults if None)
    """
    if config is None:
        config = LogConfig()

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(logging.DEBUG)  # Handlers filter
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(get_log_level(config.level))
    console_handler.setFormatter(config.formatter(sys.stdout))
    root_logger.addHandler(console_handler)

    if config.file_path:
        Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            config.file_path,
            maxBytes=config.file_max_bytes,
            backupCount=config.file_backup_count,
        )
        file_handler.setLevel(get_log_level(config.file_level))
        file_handler.setFormatter(config.formatter())
        root_logger.addHandler(file_handler)

    logging.getLogger("grpc").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a component.

    Args:
        name: Component name (will be prefixed with rbln_metrics_exporter)

    Returns:
        Logger instance
    """
    if name.startswith(ROOT_LOGGER):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
