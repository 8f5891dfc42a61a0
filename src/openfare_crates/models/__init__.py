"""Data models for dependency lock resolution."""

from __future__ import annotations

from .lock import FILE_NAME as LOCK_FILE_NAME, Lock, Payments, Plan
from .package import Package
from .package_locks import (
    DependenciesLocks,
    PackageDependenciesLocks,
    PackageLocks,
    ProjectDependenciesLocks,
    sorted_locks,
)

__all__ = [
    "DependenciesLocks",
    "LOCK_FILE_NAME",
    "Lock",
    "Package",
    "PackageDependenciesLocks",
    "PackageLocks",
    "Payments",
    "Plan",
    "ProjectDependenciesLocks",
    "sorted_locks",
]
