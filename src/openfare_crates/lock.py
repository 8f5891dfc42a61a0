"""Read ``OpenFare.lock`` files from package directories."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .errors import FilesystemError, LockParseError
from .models import LOCK_FILE_NAME, Lock
from .validators.lock_schema import lock_errors

logger = logging.getLogger(__name__)


def lock_path(package_directory: Path) -> Path:
    return Path(package_directory) / LOCK_FILE_NAME


def parse_lock_file(path: Path) -> Lock:
    """Parse and validate a lock file, failing without partial results."""
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        logger.debug("Lock file %s is not UTF-8: %s", path, exc)
        raise LockParseError(path, f"not UTF-8 text ({exc})") from exc
    except OSError as exc:
        logger.debug("Reading %s failed: %s", path, exc)
        raise FilesystemError(f"Failed to read {path}: {exc}") from exc

    try:
        document = json.loads(content)
    except json.JSONDecodeError as exc:
        logger.debug("Lock file %s is not JSON: %s", path, exc)
        raise LockParseError(path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc

    errors = lock_errors(document)
    if errors:
        logger.debug("Lock file %s failed schema validation", path)
        raise LockParseError(path, "content does not match the lock schema:\n" + errors)

    return Lock.from_dict(document)


def get_lock(package_directory: Path) -> Lock | None:
    """Return the lock stored in ``package_directory``, or None if there is none."""
    path = lock_path(package_directory)
    if not path.is_file():
        return None
    logger.debug("Reading lock file %s", path)
    return parse_lock_file(path)
