"""Resolve a Cargo dependency graph through ``cargo metadata``."""

from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from ..errors import DependencyResolutionError, LockParseError
from ..lock import get_lock
from ..models import DependenciesLocks, Lock, Package, sorted_locks

logger = logging.getLogger(__name__)

METADATA_FORMAT_VERSION = "1"


@dataclass(frozen=True)
class ResolvedPackage:
    """A package from a resolved graph and the manifest of its source tree."""

    name: str
    version: str
    manifest_path: Path

    @property
    def directory(self) -> Path:
        return self.manifest_path.parent


class DependencyResolver(Protocol):
    """Structural protocol for package-manager graph resolution."""

    def resolve(self, manifest_path: Path) -> list[ResolvedPackage]: ...


def parse(payload: str | bytes) -> list[ResolvedPackage]:
    """Return resolved packages from ``cargo metadata`` JSON output."""
    try:
        data: Any = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise DependencyResolutionError(f"cargo metadata output is not JSON: {exc}") from exc

    packages = data.get("packages") if isinstance(data, dict) else None
    if not isinstance(packages, list):
        raise DependencyResolutionError("cargo metadata output has no 'packages' array")

    resolved: list[ResolvedPackage] = []
    for index, meta in enumerate(packages):
        if not isinstance(meta, dict):
            raise DependencyResolutionError(f"cargo metadata package {index} is not an object")
        name = meta.get("name")
        version = meta.get("version")
        manifest_path = meta.get("manifest_path")
        if not all(isinstance(v, str) and v for v in (name, version, manifest_path)):
            raise DependencyResolutionError(
                f"cargo metadata package {index} lacks name, version or manifest_path"
            )
        resolved.append(
            ResolvedPackage(name=name, version=version, manifest_path=Path(manifest_path))
        )
    return resolved


class CargoMetadataResolver:
    """Run ``cargo metadata`` for the full transitive graph.

    Default features only, no platform filtering, and dependencies included.
    """

    def __init__(self, cargo: str = "cargo") -> None:
        self.cargo = cargo

    def command(self, manifest_path: Path) -> list[str]:
        return [
            self.cargo,
            "metadata",
            "--format-version",
            METADATA_FORMAT_VERSION,
            "--manifest-path",
            str(manifest_path),
        ]

    def resolve(self, manifest_path: Path) -> list[ResolvedPackage]:
        cmd = self.command(manifest_path)
        logger.debug("Running %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise DependencyResolutionError(f"Failed to run {self.cargo}: {exc}") from exc

        if proc.returncode != 0:
            logger.debug("cargo metadata exited with %s", proc.returncode)
            raise DependencyResolutionError(
                f"cargo metadata failed for {manifest_path} "
                f"(exit {proc.returncode}):\n{proc.stderr.strip()}"
            )
        return parse(proc.stdout)


def dependencies_locks(
    manifest_path: Path,
    registry: str,
    resolver: DependencyResolver,
) -> DependenciesLocks:
    """Map every package in the resolved graph to its lock, if any.

    A package reachable through several paths appears once. The map is
    ordered by ``Package``.
    """
    results: dict[Package, Lock | None] = {}
    for resolved in resolver.resolve(manifest_path):
        package = Package(registry=registry, name=resolved.name, version=resolved.version)
        if package in results:
            continue
        try:
            results[package] = get_lock(resolved.directory)
        except LockParseError:
            logger.debug("Invalid lock for dependency %s", package)
            raise
    return sorted_locks(results)
