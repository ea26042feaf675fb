"""Application entry point for statsd-notifier."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from art import tprint

from statsd_notifier import DISPLAY_NAME, settings
from statsd_notifier.adapters.build_log import StreamBuildLog
from statsd_notifier.adapters.json_config_store import JsonConfigStore
from statsd_notifier.adapters.plugin_registry import ConfiguredPluginRegistry
from statsd_notifier.adapters.report_readers import (
    read_checkstyle_warnings,
    read_junit_summary,
    read_pmd_warnings,
)
from statsd_notifier.client import build_client
from statsd_notifier.core import capabilities
from statsd_notifier.core.emitter import MetricsEmitter
from statsd_notifier.core.errors import ConfigError, ReportError
from statsd_notifier.core.models import BuildResultView
from statsd_notifier.core.ports import BuildLogPort

NAME = "STATSD"
FONT = "tarty-1"

EXIT_OK = 0
EXIT_USAGE = 2

T = TypeVar("T")


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _configure_logging(config: Optional[dict[str, Any]], base_dir: Path) -> None:
    config = config or {}
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", settings.DEFAULT_LOG_LEVEL)).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        # stderr keeps the build log on stdout readable.
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", settings.DEFAULT_LOG_FILE)
        if not os.path.isabs(path):
            path = os.path.join(base_dir, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", settings.DEFAULT_LOG_MAX_BYTES))
        backup_count = int(file_cfg.get("backup_count", settings.DEFAULT_LOG_BACKUP_COUNT))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    # Replaces handlers left by an earlier call in the same process.
    logging.basicConfig(level=level, handlers=handlers, force=True)


def _read_report(
    label: str,
    reader: Callable[[Any], Optional[T]],
    source: Any,
    build_log: BuildLogPort,
) -> Optional[T]:
    if not source:
        return None
    try:
        return reader(source)
    except ReportError as exc:
        # A broken report is treated like a missing one; the emitter logs the skip.
        build_log.println(f"Can not read {label} report: {exc}")
        return None


def _run(args: argparse.Namespace) -> int:
    store = JsonConfigStore(settings.resolve_config_path(args.config))
    try:
        document = store.read()
        global_config = store.load_global()
        notifier_config = store.get_job(args.job)
    except ConfigError as exc:
        print(f"Invalid configuration in {store.path}: {exc}", file=sys.stderr)
        return EXIT_USAGE

    _configure_logging(document.get("logging"), store.path.parent)
    logger = logging.getLogger(__name__)

    if notifier_config is None:
        print(f"No notifier step configured for job {args.job!r} in {store.path}", file=sys.stderr)
        return EXIT_USAGE

    try:
        started_at = settings.resolve_started_at(args.started_at)
    except ValueError as exc:
        print(f"Invalid build start time: {exc}", file=sys.stderr)
        return EXIT_USAGE

    logger.info("Publishing results for job %s", args.job)

    build_log = StreamBuildLog()
    result = BuildResultView(
        started_at=started_at,
        checkstyle_warnings=_read_report("checkstyle", read_checkstyle_warnings, args.checkstyle, build_log),
        pmd_warnings=_read_report("pmd", read_pmd_warnings, args.pmd, build_log),
        junit=_read_report("junit", read_junit_summary, args.junit, build_log),
    )

    registry = ConfiguredPluginRegistry(store.installed_plugins())
    emitter = MetricsEmitter(client_factory=build_client, registry=registry)
    # Metrics delivery is best-effort: the outcome never changes the exit code.
    emitter.emit(notifier_config, global_config, result, build_log)
    return EXIT_OK


def _plugins(args: argparse.Namespace) -> int:
    _print_banner()
    store = JsonConfigStore(settings.resolve_config_path(args.config))
    try:
        registry = ConfiguredPluginRegistry(store.installed_plugins())
    except ConfigError as exc:
        print(f"Invalid configuration in {store.path}: {exc}", file=sys.stderr)
        return EXIT_USAGE

    for plugin_id in capabilities.COMPANION_PLUGINS:
        state = "installed" if registry.is_installed(plugin_id) else "missing"
        print(f"{plugin_id}: {state}")
    applicable = "yes" if capabilities.is_applicable(registry) else "no"
    print(f"{DISPLAY_NAME} applicable: {applicable}")
    return EXIT_OK


def _setup(args: argparse.Namespace) -> int:
    _print_banner()
    from statsd_notifier.frontend.app import ConfigPanelApp

    ConfigPanelApp(config_path=settings.resolve_config_path(args.config)).run()
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="statsd-notifier", description=DISPLAY_NAME)
    parser.add_argument("--config", help="Path to config.json (default: $STATSD_NOTIFIER_CONFIG or ./config.json)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Send a finished build's results to StatsD")
    run_parser.add_argument("--job", required=True, help="Job whose notifier step to use")
    run_parser.add_argument("--checkstyle", help="checkstyle-result.xml of the build")
    run_parser.add_argument("--pmd", help="pmd.xml of the build")
    run_parser.add_argument(
        "--junit",
        action="append",
        help="JUnit XML file or glob; can be given several times",
    )
    run_parser.add_argument(
        "--started-at",
        help="Build start time (ISO 8601 or epoch seconds; default: $BUILD_STARTED_AT or now)",
    )

    subparsers.add_parser("config", help="Launch the config TUI")
    subparsers.add_parser("plugins", help="Show installed companion plugins")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "config":
        return _setup(args)
    if args.command == "plugins":
        return _plugins(args)
    return _run(args)


if __name__ == "__main__":
    sys.exit(main())
