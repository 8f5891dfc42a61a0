"""Error types raised while resolving crate dependencies and locks."""

from __future__ import annotations

from pathlib import Path


class ResolutionError(RuntimeError):
    """Base error for failures while resolving packages and their locks."""


class InvalidInputError(ResolutionError):
    """Raised when a caller supplies an unusable argument (e.g. a relative path)."""


class NotFoundError(ResolutionError):
    """Raised when the registry has no version for a package."""


class RegistryError(ResolutionError):
    """Raised when the registry cannot be reached or returns an unusable body."""


class ArchiveError(ResolutionError):
    """Raised when a downloaded crate archive cannot be extracted."""


class ManifestError(ResolutionError):
    """Raised when a manifest is unreadable or lacks required fields."""


class LockParseError(ResolutionError):
    """Raised when a lock file exists but does not hold a valid lock."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to parse lock file {path}: {reason}")
        self.path = path
        self.reason = reason


class DependencyResolutionError(ResolutionError):
    """Raised when the package manager fails to resolve a dependency graph."""


class FilesystemError(ResolutionError):
    """Raised on I/O failures (permissions, missing directories, full disk)."""
