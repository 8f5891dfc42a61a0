"""Parse Cargo.toml to obtain the package identity."""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import FilesystemError, ManifestError
from ..models import Package

logger = logging.getLogger(__name__)


def parse(path: Path, registry: str) -> Package:
    """Return the ``Package`` declared by the ``[package]`` table.

    ``registry`` tags the resulting package; it is never read from the file.
    """
    import toml

    try:
        contents = path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.debug("Reading %s failed: %s", path, exc)
        raise FilesystemError(f"Failed to read {path}: {exc}") from exc

    try:
        manifest = toml.loads(contents)
    except toml.TomlDecodeError as exc:
        logger.debug("Invalid TOML in %s: %s", path, exc)
        raise ManifestError(f"Invalid TOML in {path}: {exc}") from exc

    table = manifest.get("package")
    if not isinstance(table, dict):
        logger.debug("No package table in %s", path)
        raise ManifestError(f"Failed to find table 'package' in {path}")

    fields: dict[str, str] = {}
    for key in ("name", "version"):
        value = table.get(key)
        if not isinstance(value, str) or not value:
            logger.debug("Missing package.%s in %s", key, path)
            raise ManifestError(f"Failed to find field 'package.{key}' in {path}")
        fields[key] = value

    return Package(registry=registry, name=fields["name"], version=fields["version"])
