"""Resolution result models."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .lock import Lock
from .package import Package

DependenciesLocks = dict[Package, Lock | None]


def sorted_locks(
    items: Mapping[Package, Lock | None] | Iterable[tuple[Package, Lock | None]],
) -> DependenciesLocks:
    """Return a dependency map ordered by package identity."""
    pairs = items.items() if isinstance(items, Mapping) else items
    return dict(sorted(pairs, key=lambda kv: kv[0]))


@dataclass(frozen=True)
class PackageLocks:
    """A primary package, its lock, and the locks of its dependencies."""

    primary_package: Package | None = None
    primary_package_lock: Lock | None = None
    dependencies_locks: DependenciesLocks = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        # JSON object keys must be strings, so the map is emitted as entries.
        return {
            "primary_package": (
                self.primary_package.to_dict() if self.primary_package is not None else None
            ),
            "primary_package_lock": (
                self.primary_package_lock.to_dict()
                if self.primary_package_lock is not None
                else None
            ),
            "dependencies_locks": [
                {
                    "package": package.to_dict(),
                    "lock": lock.to_dict() if lock is not None else None,
                }
                for package, lock in self.dependencies_locks.items()
            ],
        }


@dataclass(frozen=True)
class PackageDependenciesLocks:
    """Result of resolving a registry package by name."""

    registry_host_name: str
    package_locks: PackageLocks

    def to_dict(self) -> dict[str, object]:
        return {
            "registry_host_name": self.registry_host_name,
            "package_locks": self.package_locks.to_dict(),
        }


@dataclass(frozen=True)
class ProjectDependenciesLocks:
    """Result of resolving a local project from a working directory."""

    project_path: Path | None = None
    package_locks: PackageLocks = field(default_factory=PackageLocks)

    def to_dict(self) -> dict[str, object]:
        return {
            "project_path": str(self.project_path) if self.project_path is not None else None,
            "package_locks": self.package_locks.to_dict(),
        }

    @classmethod
    def default(cls) -> ProjectDependenciesLocks:
        """Empty result used when no project manifest is found."""
        return cls()
