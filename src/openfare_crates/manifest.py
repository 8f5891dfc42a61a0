"""Manifest reader registry keyed by dependency file dialect.

Add a dialect by extending ``DependencyFileType`` and registering its parser
here; callers only go through :func:`read_manifest`.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

from .discovery import DependencyFile, DependencyFileType
from .models import Package
from .parsers.cargo_toml import parse as parse_cargo_toml

ManifestParser: TypeAlias = Callable[[Path, str], Package]

MANIFEST_PARSERS: dict[DependencyFileType, ManifestParser] = {
    DependencyFileType.CARGO_TOML: parse_cargo_toml,
}


def read_manifest(dependency_file: DependencyFile, registry: str) -> Package:
    """Parse the primary package from a dependency file."""
    parser = MANIFEST_PARSERS[dependency_file.kind]
    return parser(dependency_file.path, registry)
