#!/usr/bin/env python3
"""logwatch composition root.

Wires the event bus, the file-watcher export listener, its metrics and log
sinks, and (optionally) the Prometheus scrape endpoint. Registration with the
bus happens here, explicitly; nothing registers itself at import time.
"""
from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from dataclasses import dataclass, field

from prometheus_client import REGISTRY, CollectorRegistry

from logwatch.bus import EventBus
from logwatch.config.settings import FileWatcherConfig, load_config
from logwatch.filewatcher.listener import FileWatcherListener
from logwatch.logstream.sink import LoggerSink, LogSink
from logwatch.metrics.exporter import TopicMetricsExporter
from logwatch.metrics.server import start_metrics_server
from logwatch.utils.exceptions import ConfigError
from logwatch.utils.logging_utils import setup_logging
from logwatch.version import get_version

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    bus: EventBus
    listener: FileWatcherListener
    metrics_exporter: TopicMetricsExporter
    shutdown: threading.Event = field(default_factory=threading.Event)


def build_app(config: FileWatcherConfig, *, registry: CollectorRegistry | None = None,
              log_sink: LogSink | None = None, bus: EventBus | None = None) -> AppState:
    """Construct and register components; nothing is started."""
    exporter = TopicMetricsExporter().register(registry or REGISTRY)
    listener = FileWatcherListener(config, metrics_exporter=exporter, log_sink=log_sink or LoggerSink())
    bus = bus or EventBus('core')
    bus.register(listener)
    return AppState(bus=bus, listener=listener, metrics_exporter=exporter)


def setup_signal_handling(app_state: AppState) -> None:
    """Set up signal handlers for graceful shutdown."""
    def signal_handler(sig, frame):
        logger.info("Received signal %s, shutting down gracefully", sig)
        app_state.shutdown.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='logwatch - file watcher metrics export')
    parser.add_argument('--config', default=None,
                        help='Path to YAML configuration file (filewatcher section)')
    parser.add_argument('--metrics-port', type=int, default=9108,
                        help='Prometheus scrape port, 0 disables (default: 9108)')
    parser.add_argument('--metrics-host', default='0.0.0.0')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO', help='Set the logging level')
    parser.add_argument('--log-file', default=None, help='Optional log file path')
    parser.add_argument('--version', action='version', version=f'logwatch {get_version()}')
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_arguments(argv)
    setup_logging(args.log_level, log_file=args.log_file)
    logger.info("logwatch %s starting up", get_version())

    try:
        config = load_config(args.config) if args.config else FileWatcherConfig.from_env()
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    app_state = build_app(config)
    setup_signal_handling(app_state)
    if args.metrics_port:
        start_metrics_server(args.metrics_port, host=args.metrics_host)

    app_state.bus.init_all()
    app_state.bus.start_all()
    logger.info("logwatch is running. Press Ctrl+C to stop.")
    try:
        app_state.shutdown.wait()
    finally:
        logger.info("Shutting down logwatch")
        app_state.bus.stop_all()
    return 0


if __name__ == '__main__':
    sys.exit(main())
