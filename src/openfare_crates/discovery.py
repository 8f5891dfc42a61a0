"""Project manifest discovery utilities."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import InvalidInputError

logger = logging.getLogger(__name__)


class DependencyFileType(Enum):
    """Recognised dependency definition file dialects, valued by file name."""

    CARGO_TOML = "Cargo.toml"

    @property
    def file_name(self) -> str:
        return self.value


@dataclass(frozen=True)
class DependencyFile:
    """A dependency definition file and the dialect it is written in."""

    kind: DependencyFileType
    path: Path


def identify_dependency_files(working_directory: Path) -> list[DependencyFile] | None:
    """Return the dependency files of the nearest directory that has any.

    Walks from ``working_directory`` up towards the filesystem root and stops at
    the first directory holding at least one recognised file. Every recognised
    file in that directory is returned, in ``DependencyFileType`` order.

    Returns None when the root is reached without a match.

    Raises:
        InvalidInputError: If ``working_directory`` is not absolute.
    """
    working_directory = Path(working_directory)
    if not working_directory.is_absolute():
        raise InvalidInputError(
            f"Working directory must be an absolute path: {working_directory}"
        )

    directory = working_directory
    while True:
        found = [
            DependencyFile(kind=kind, path=directory / kind.file_name)
            for kind in DependencyFileType
            if (directory / kind.file_name).is_file()
        ]
        if found:
            logger.debug("Found %d dependency file(s) in %s", len(found), directory)
            return found

        parent = directory.parent
        if parent == directory:
            break
        directory = parent

    logger.debug("No dependency files found above %s", working_directory)
    return None
