"""
Entry point for the RBLN Metrics Exporter.

Usage:
    python -m rbln_metrics_exporter --port 9090 --interval 5
    python -m rbln_metrics_exporter --oneshot
    python -m rbln_metrics_exporter --help

Every option can also be set with an RBLN_METRICS_EXPORTER_* environment
variable; command-line values win.
"""

import argparse
import asyncio
import sys

from . import __version__
from .app import run_app
from .config.loader import ConfigError, ConfigLoader
from .config.schema import Config
from .const import MAX_INTERVAL, MIN_INTERVAL
from .errors import DaemonConnectionError
from .logging import LogConfig, get_logger, setup_logging


logger = get_logger("main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rbln-metrics-exporter",
        description="Expose RBLN device metrics via Prometheus",
    )

    parser.add_argument(
        "--rbln-daemon-url",
        metavar="ADDR",
        help="Endpoint of the RBLN daemon gRPC server (default: 127.0.0.1:50051)",
    )

    parser.add_argument(
        "--port",
        type=int,
        help="Port to listen for requests (default: 9090)",
    )

    parser.add_argument(
        "--interval",
        type=int,
        metavar="SECONDS",
        help=f"Interval of collecting metrics ({MIN_INTERVAL}-{MAX_INTERVAL} seconds, default: 5)",
    )

    parser.add_argument(
        "--oneshot",
        action="store_true",
        default=None,
        help="Collect once, print the metrics and exit",
    )

    parser.add_argument(
        "--node-name",
        help="Name of the node (default: $NODE_NAME or hostname)",
    )

    parser.add_argument(
        "--kubernetes-mode",
        choices=["auto", "on", "off"],
        help="Export pod/namespace/container labels (default: auto)",
    )

    parser.add_argument(
        "--inventory-mode",
        choices=["aggregated", "per_device"],
        help="How device telemetry is fetched from the daemon (default: aggregated)",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging (INFO level)",
    )

    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Enable debug logging (DEBUG level)",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Quiet mode (only errors)",
    )

    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        help="Log format (default: json)",
    )

    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write logs to file",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored text output",
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def overrides_from_args(args: argparse.Namespace) -> dict[str, object]:
    """Map parsed arguments onto config overrides; unset options are None."""
    log_level = None
    if args.debug:
        log_level = "debug"
    elif args.verbose:
        log_level = "info"
    elif args.quiet:
        log_level = "error"

    return {
        "rbln_daemon_url": args.rbln_daemon_url,
        "port": args.port,
        "interval": args.interval,
        "oneshot": args.oneshot,
        "node_name": args.node_name,
        "kubernetes_mode": args.kubernetes_mode,
        "inventory_mode": args.inventory_mode,
        "log_level": log_level,
        "log_format": args.log_format,
        "log_file": args.log_file,
    }


def log_config_from(config: Config, no_color: bool = False) -> LogConfig:
    return LogConfig(
        level=config.logging.level,
        json=config.logging.format == "json",
        colors=config.logging.colors and not no_color,
        file_path=config.logging.file,
    )


def print_summary(config: Config, warnings: list[str]) -> None:
    """Print the resolved configuration and warnings."""
    if warnings:
        print(f"Configuration warnings ({len(warnings)}):")
        for warning in warnings:
            print(f"  - {warning}")

    print("\nConfiguration summary:")
    print(f"  Daemon: {config.daemon.url} ({config.daemon.inventory_mode})")
    print(f"  Port: {config.exporter.port}")
    print(f"  Interval: {config.exporter.interval}s")
    print(f"  Oneshot: {'yes' if config.exporter.oneshot else 'no'}")
    print(f"  Node name: {config.exporter.node_name}")
    print(f"  Kubernetes mode: {config.kubernetes.mode}")
    print(f"  Logging: {config.logging.level} ({config.logging.format})")
    if config.logging.file:
        print(f"  Log file: {config.logging.file}")

    print("\nConfiguration is valid!")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    loader = ConfigLoader()
    try:
        config = loader.load(overrides=overrides_from_args(args))
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    warnings = loader.validate(config)

    if args.validate:
        print_summary(config, warnings)
        return 0

    setup_logging(log_config_from(config, no_color=args.no_color))
    for warning in warnings:
        logger.warning(f"Config warning: {warning}")

    try:
        ok = asyncio.run(run_app(config))
        return 0 if ok else 1
    except DaemonConnectionError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
