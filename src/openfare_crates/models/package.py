"""Package identity model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Package:
    """Identify a package by registry, name and version.

    Ordering compares ``(registry, name, version)`` lexicographically, which
    gives dependency maps a deterministic iteration order.
    """

    registry: str
    name: str
    version: str

    def __post_init__(self) -> None:
        if not self.registry:
            raise ValueError("Package registry must be non-empty")
        if not self.name:
            raise ValueError("Package name must be non-empty")
        if not self.version:
            raise ValueError("Package version must be non-empty")

    def __str__(self) -> str:
        return f"{self.registry}/{self.name}@{self.version}"

    def to_dict(self) -> dict[str, str]:
        return {
            "registry": self.registry,
            "name": self.name,
            "version": self.version,
        }
