"""Core resolution entrypoints.

This module does no argument parsing or output formatting, so it serves both
the extension capability and the command runner.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Sequence
from pathlib import Path

from .config import Settings
from .discovery import identify_dependency_files
from .errors import InvalidInputError, ManifestError, NotFoundError
from .lock import get_lock
from .manifest import read_manifest
from .models import (
    DependenciesLocks,
    PackageDependenciesLocks,
    PackageLocks,
    ProjectDependenciesLocks,
)
from .parsers.cargo_metadata import DependencyResolver, dependencies_locks
from .registry import CratesRegistryClient

logger = logging.getLogger(__name__)

TEMP_DIR_PREFIX = "openfare_crates"


def _package_dependencies_locks(
    package_directory: Path,
    registry: str,
    resolver: DependencyResolver,
) -> DependenciesLocks:
    dependency_files = identify_dependency_files(package_directory)
    if not dependency_files:
        logger.debug("Did not identify any dependency definition files.")
        return {}
    return dependencies_locks(dependency_files[0].path, registry, resolver)


def package_dependencies_locks(
    package_name: str,
    package_version: str | None,
    extension_args: Sequence[str] = (),
    *,
    settings: Settings,
    client: CratesRegistryClient,
    resolver: DependencyResolver,
) -> PackageDependenciesLocks:
    """Resolve a registry crate by name and collect its dependency locks.

    Params:
        package_name: crate name on the registry
        package_version: exact version; when None the registry's newest version
            is used
        extension_args: reserved, currently ignored

    The crate is unpacked into a fresh temporary directory which is removed
    before returning, whether or not resolution succeeds. The primary package
    never appears in the returned dependency map.
    """
    if not package_name:
        raise InvalidInputError("Package name must be non-empty")
    if package_version is not None and not package_version:
        raise InvalidInputError(f"Package version of {package_name} must be non-empty")

    if package_version is None:
        logger.debug("No version argument given. Querying for latest version.")
        package_version = client.get_latest_version(package_name)
        if package_version is None:
            raise NotFoundError(
                f"Failed to find latest version of {package_name}. Please specify version."
            )
    logger.debug("Using version: %s", package_version)

    package = client.get_package(package_name, package_version)

    with tempfile.TemporaryDirectory(prefix=TEMP_DIR_PREFIX) as tmp:
        tmp_dir = Path(tmp)
        logger.debug("Using temporary directory: %s", tmp_dir)
        package_directory = client.setup_package_directory(
            package_name, package_version, tmp_dir
        )

        lock = get_lock(package_directory)
        locks = _package_dependencies_locks(package_directory, settings.host_name, resolver)
        locks.pop(package, None)

    return PackageDependenciesLocks(
        registry_host_name=settings.host_name,
        package_locks=PackageLocks(
            primary_package=package,
            primary_package_lock=lock,
            dependencies_locks=locks,
        ),
    )


def project_dependencies_locks(
    working_directory: Path,
    extension_args: Sequence[str] = (),
    *,
    settings: Settings,
    resolver: DependencyResolver,
) -> ProjectDependenciesLocks:
    """Resolve the Cargo project enclosing ``working_directory``.

    Returns an empty result when no manifest exists in the directory or any
    ancestor. The primary package is left in the dependency map as the
    resolver reports it.
    """
    dependency_files = identify_dependency_files(working_directory)
    if not dependency_files:
        logger.debug("Did not identify any dependency definition files.")
        return ProjectDependenciesLocks.default()

    dependency_file = dependency_files[0]
    logger.debug("Found dependency definitions file: %s", dependency_file.path)
    project_path = dependency_file.path.parent

    try:
        primary_package = read_manifest(dependency_file, settings.host_name)
    except ManifestError as exc:
        logger.debug("Primary package unavailable: %s", exc)
        primary_package = None

    primary_package_lock = get_lock(project_path)
    locks = dependencies_locks(dependency_file.path, settings.host_name, resolver)

    return ProjectDependenciesLocks(
        project_path=project_path,
        package_locks=PackageLocks(
            primary_package=primary_package,
            primary_package_lock=primary_package_lock,
            dependencies_locks=locks,
        ),
    )
