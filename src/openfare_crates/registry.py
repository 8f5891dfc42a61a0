"""crates.io registry client."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from urllib.parse import quote

import requests
from requests import Response

from .archive import extract_tar_gz
from .config import Settings
from .errors import FilesystemError, RegistryError
from .models import Package

logger = logging.getLogger(__name__)

ARCHIVE_FILE_NAME = "archive"
CRATE_DIRECTORY_NAME = "crate"
_CHUNK_SIZE = 64 * 1024


class CratesRegistryClient:
    """Query crate metadata and download crate archives.

    Each request is sent once with the configured ``User-Agent``; failures
    are not retried.
    """

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        self.settings = settings
        self.session = session if session is not None else requests.Session()
        self.session.headers["User-Agent"] = settings.user_agent

    def _get(
        self, url: str, *, stream: bool = False, accept: tuple[int, ...] = (200,)
    ) -> Response:
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, stream=stream, timeout=self.settings.timeout)
        except requests.RequestException as exc:
            logger.debug("GET %s failed: %s", url, exc)
            raise RegistryError(f"Request to {url} failed: {exc}") from exc

        if response.status_code not in accept:
            response.close()
            logger.debug("GET %s returned status %s", url, response.status_code)
            raise RegistryError(f"Unexpected status code {response.status_code} fetching {url}")
        return response

    def crate_url(self, package_name: str) -> str:
        return f"{self.settings.api_base_url}/crates/{quote(package_name, safe='')}"

    def crate_download_url(self, package_name: str, package_version: str) -> str:
        return f"{self.crate_url(package_name)}/{quote(package_version, safe='')}/download"

    def get_registry_entry(self, package_name: str) -> dict[str, Any]:
        """Return the decoded JSON registry entry for a crate.

        crates.io answers an unknown crate with a 404 whose body is a JSON error
        document; that body is returned like any other entry, so the missing
        ``crate`` table surfaces as "no version" rather than a transport error.
        """
        url = self.crate_url(package_name)
        response = self._get(url, accept=(200, 404))
        try:
            data = response.json()
        except ValueError as exc:
            logger.debug("Registry entry from %s is not JSON: %s", url, exc)
            raise RegistryError(f"JSON was not well-formatted from {url}: {exc}") from exc
        if not isinstance(data, dict):
            logger.debug("Registry entry from %s has type %s", url, type(data).__name__)
            raise RegistryError(f"Registry entry from {url} is not a JSON object")
        return data

    def get_latest_version(self, package_name: str) -> str | None:
        """Return the newest version the registry reports, or None if absent."""
        entry = self.get_registry_entry(package_name)
        crate = entry.get("crate")
        if not isinstance(crate, dict):
            return None
        version = crate.get("newest_version")
        return version if isinstance(version, str) and version else None

    def download(self, url: str, destination: Path) -> Path:
        """Stream ``url`` into ``destination``."""
        response = self._get(url, stream=True)
        try:
            with response, destination.open("wb") as fh:
                for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                    if chunk:
                        fh.write(chunk)
        except requests.RequestException as exc:
            logger.debug("Download from %s failed: %s", url, exc)
            raise RegistryError(f"Download from {url} failed: {exc}") from exc
        except OSError as exc:
            logger.debug("Writing %s failed: %s", destination, exc)
            raise FilesystemError(f"Failed to write {destination}: {exc}") from exc
        return destination

    def setup_package_directory(
        self,
        package_name: str,
        package_version: str,
        root_directory: Path,
    ) -> Path:
        """Download and unpack a crate version under ``root_directory``.

        The archive is stored at ``root_directory/archive`` and extracted into
        ``root_directory/crate``. Returns the extracted package directory.
        """
        url = self.crate_download_url(package_name, package_version)
        archive_path = self.download(url, root_directory / ARCHIVE_FILE_NAME)
        logger.debug("Downloaded %s %s to %s", package_name, package_version, archive_path)
        return extract_tar_gz(archive_path, root_directory / CRATE_DIRECTORY_NAME)

    def get_package(self, package_name: str, package_version: str) -> Package:
        return Package(
            registry=self.settings.host_name,
            name=package_name,
            version=package_version,
        )
