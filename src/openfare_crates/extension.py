"""Extension capability exposed to the OpenFare host."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from . import __version__, core
from .config import Settings, load_settings
from .models import PackageDependenciesLocks, ProjectDependenciesLocks
from .parsers.cargo_metadata import CargoMetadataResolver, DependencyResolver
from .registry import CratesRegistryClient

EXTENSION_NAME = "rs"


class Extension(Protocol):
    """Operations every registry integration offers to the host dispatcher."""

    def name(self) -> str: ...

    def registries(self) -> list[str]: ...

    def version(self) -> str: ...

    def package_dependencies_locks(
        self,
        package_name: str,
        package_version: str | None,
        extension_args: Sequence[str],
    ) -> PackageDependenciesLocks: ...

    def project_dependencies_locks(
        self,
        working_directory: Path,
        extension_args: Sequence[str],
    ) -> ProjectDependenciesLocks: ...


class CratesExtension:
    """crates.io / Cargo implementation of :class:`Extension`."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: CratesRegistryClient | None = None,
        resolver: DependencyResolver | None = None,
    ) -> None:
        self.settings = settings if settings is not None else load_settings()
        self.client = client if client is not None else CratesRegistryClient(self.settings)
        self.resolver = (
            resolver if resolver is not None else CargoMetadataResolver(self.settings.cargo)
        )

    def name(self) -> str:
        return EXTENSION_NAME

    def registries(self) -> list[str]:
        return [self.settings.host_name]

    def version(self) -> str:
        return __version__

    def package_dependencies_locks(
        self,
        package_name: str,
        package_version: str | None,
        extension_args: Sequence[str] = (),
    ) -> PackageDependenciesLocks:
        return core.package_dependencies_locks(
            package_name,
            package_version,
            extension_args,
            settings=self.settings,
            client=self.client,
            resolver=self.resolver,
        )

    def project_dependencies_locks(
        self,
        working_directory: Path,
        extension_args: Sequence[str] = (),
    ) -> ProjectDependenciesLocks:
        return core.project_dependencies_locks(
            working_directory,
            extension_args,
            settings=self.settings,
            resolver=self.resolver,
        )
