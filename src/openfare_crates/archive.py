"""Crate archive extraction."""

from __future__ import annotations

import gzip
import logging
import tarfile
import zlib
from pathlib import Path

from .errors import ArchiveError, FilesystemError

logger = logging.getLogger(__name__)


def extract_tar_gz(archive_path: Path, destination: Path) -> Path:
    """Extract a gzip-compressed tarball and return its top-level directory.

    Crate archives hold a single ``<name>-<version>/`` directory, which is
    returned. If the archive has several top-level entries, ``destination``
    itself is returned instead.

    Members are extracted with tarfile's ``"data"`` filter, which rejects
    absolute paths, parent traversal, and device files.
    """
    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(f"Failed to create directory {destination}: {exc}") from exc

    try:
        with tarfile.open(archive_path, "r:gz") as tf:
            tf.extractall(path=destination, filter="data")
    except (tarfile.TarError, EOFError, zlib.error, gzip.BadGzipFile) as exc:
        logger.debug("Extraction of %s failed: %s", archive_path, exc)
        raise ArchiveError(f"Failed to extract archive {archive_path}: {exc}") from exc
    except OSError as exc:
        logger.debug("Extraction of %s failed: %s", archive_path, exc)
        raise FilesystemError(f"I/O error extracting {archive_path}: {exc}") from exc

    entries = list(destination.iterdir())
    if not entries:
        raise ArchiveError(f"Archive {archive_path} is empty")
    if len(entries) == 1 and entries[0].is_dir():
        return entries[0]
    return destination
