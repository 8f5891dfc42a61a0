"""Command runner used by the OpenFare host to invoke the extension.

Usage:
  openfare-crates static-data
  openfare-crates package-dependencies-locks --package-name serde [--package-version 1.0.0]
  openfare-crates project-dependencies-locks --working-directory .

``--extension-args`` must come last; everything after it is passed through.

Every command prints one JSON document, ``{"ok": ..., "err": ...}``, on stdout.
Logging goes to stderr and is off unless ``OPENFARE_CRATES_LOG`` is set.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

from .config import LOG_ENV_VAR, ConfigError
from .errors import ResolutionError
from .extension import CratesExtension, Extension

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def configure_logging(value: str | None = None) -> None:
    """Configure stderr logging from a level name; ``off`` disables it."""
    level_name = (value if value is not None else os.getenv(LOG_ENV_VAR, "off")).strip().lower()
    if level_name in {"", "off", "none"}:
        logging.disable(logging.CRITICAL)
        return
    logging.disable(logging.NOTSET)
    logging.basicConfig(
        level=_LOG_LEVELS.get(level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="openfare-crates", description="OpenFare Rust extension")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("static-data", help="Print extension name, registries and version")

    package = commands.add_parser(
        "package-dependencies-locks",
        help="Resolve a crates.io package and its dependency locks",
    )
    package.add_argument("--package-name", required=True)
    package.add_argument("--package-version", default=None)
    package.add_argument(
        "--extension-args",
        nargs=argparse.REMAINDER,
        default=[],
        help="Passed to the extension untouched; must come last",
    )

    project = commands.add_parser(
        "project-dependencies-locks",
        help="Resolve the Cargo project enclosing a directory",
    )
    project.add_argument("--working-directory", type=Path, default=Path("."))
    project.add_argument(
        "--extension-args",
        nargs=argparse.REMAINDER,
        default=[],
        help="Passed to the extension untouched; must come last",
    )

    return parser.parse_args(argv)


def run(extension: Extension, args: argparse.Namespace) -> Any:
    """Dispatch a parsed command to ``extension`` and return a JSON-able result."""
    if args.command == "static-data":
        return {
            "name": extension.name(),
            "registry_host_names": extension.registries(),
            "version": extension.version(),
        }
    if args.command == "package-dependencies-locks":
        result = extension.package_dependencies_locks(
            args.package_name, args.package_version, args.extension_args
        )
        return result.to_dict()
    if args.command == "project-dependencies-locks":
        working_directory = args.working_directory.expanduser().absolute()
        result = extension.project_dependencies_locks(working_directory, args.extension_args)
        return result.to_dict()
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = parse_args(argv)

    try:
        output = {"ok": run(CratesExtension(), args), "err": None}
        status = 0
    except (ResolutionError, ConfigError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        output = {"ok": None, "err": str(exc)}
        status = 1

    print(json.dumps(output, indent=2))
    return status


if __name__ == "__main__":
    raise SystemExit(main())
