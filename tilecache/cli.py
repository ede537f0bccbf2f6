"""CLI entry point for tilecache."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys
from typing import Any, Sequence

import yaml

from tilecache.config.errors import ConfigError, DiskError
from tilecache.config.loader import compile_config, initialize_config, load_settings
from tilecache.config.schema import Config
from tilecache.config.settings import RuntimeSettings
from tilecache.core.doctor import run_diagnostics
from tilecache.core.logging import configure_logging


EXIT_PARSE_ERROR = 1
EXIT_DISK_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tilecache")
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="YAML runtime settings (logging, api, default config path)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init", help="Write a starter configuration document")
    init_parser.add_argument("--config", type=Path, default=Path("./tilecache.xml"))
    init_parser.add_argument("--force", action="store_true")

    check_parser = subparsers.add_parser("check", help="Compile the configuration and print a summary")
    check_parser.add_argument("--config", type=Path, default=None)

    show_parser = subparsers.add_parser("show", help="Print every compiled entity")
    show_parser.add_argument("--config", type=Path, default=None)
    show_parser.add_argument("--format", dest="output_format", choices=("json", "yaml"), default="json")

    doctor_parser = subparsers.add_parser("doctor", help="Run configuration diagnostics")
    doctor_parser.add_argument("--config", type=Path, default=None)

    serve_parser = subparsers.add_parser("serve", help="Serve the compiled configuration read-only over HTTP")
    serve_parser.add_argument("--config", type=Path, default=None)
    serve_parser.add_argument("--host", type=str, default=None)
    serve_parser.add_argument("--port", type=int, default=None)

    return parser


def _config_path(settings: RuntimeSettings, override: Path | None) -> Path:
    return override if override is not None else Path(settings.config_path)


def _compile(config_path: Path) -> tuple[Config | None, int]:
    try:
        return compile_config(config_path), 0
    except FileNotFoundError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return None, EXIT_PARSE_ERROR
    except DiskError as exc:
        print(f"disk error: {exc}", file=sys.stderr)
        return None, EXIT_DISK_ERROR
    except ConfigError as exc:
        print(f"parse error: {exc}", file=sys.stderr)
        return None, EXIT_PARSE_ERROR


def cmd_init(config_path: Path, force: bool) -> int:
    initialize_config(config_path, force=force)
    print(f"wrote config: {config_path}")
    return 0


def cmd_check(config_path: Path) -> int:
    config, rc = _compile(config_path)
    if config is None:
        return rc
    print(json.dumps(config.summary(), indent=2))
    return 0


def cmd_show(config_path: Path, *, output_format: str) -> int:
    config, rc = _compile(config_path)
    if config is None:
        return rc
    payload: dict[str, Any] = config.describe()
    if output_format == "yaml":
        print(yaml.safe_dump(payload, sort_keys=False), end="")
    else:
        print(json.dumps(payload, indent=2))
    return 0


def cmd_doctor(config_path: Path) -> int:
    config, rc = _compile(config_path)
    if config is None:
        return rc
    report = run_diagnostics(config)
    print(json.dumps(report, indent=2))
    return 0 if bool(report.get("ok")) else 1


def cmd_serve(config_path: Path, settings: RuntimeSettings, *, host: str | None, port: int | None) -> int:
    config, rc = _compile(config_path)
    if config is None:
        return rc
    try:
        from tilecache.dashboard.api import create_app
        import uvicorn
    except Exception as exc:
        raise RuntimeError("api dependencies are missing; install with 'tilecache[api]'") from exc

    app = create_app(config, settings.api)
    uvicorn.run(
        app,
        host=host or settings.api.host,
        port=int(port or settings.api.port),
        log_level=settings.logging.level.lower(),
    )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "init":
        return cmd_init(args.config, args.force)

    settings = load_settings(args.settings)
    configure_logging(settings.logging)
    config_path = _config_path(settings, args.config)

    if args.command == "check":
        return cmd_check(config_path)
    if args.command == "show":
        return cmd_show(config_path, output_format=args.output_format)
    if args.command == "doctor":
        return cmd_doctor(config_path)
    if args.command == "serve":
        return cmd_serve(config_path, settings, host=args.host, port=args.port)

    parser.error(f"unknown command: {args.command}")
    return 2

