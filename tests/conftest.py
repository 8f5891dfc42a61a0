"""Shared test fixtures."""

from __future__ import annotations

import io
import json
import logging
import tarfile
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
import requests

from openfare_crates.config import Settings
from openfare_crates.parsers.cargo_metadata import ResolvedPackage


class FakeResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(self, status_code: int = 200, content: bytes = b"", json_data: Any = None) -> None:
        self.status_code = status_code
        self.content = content if json_data is None else json.dumps(json_data).encode("utf-8")
        self.closed = False

    def json(self) -> Any:
        return json.loads(self.content.decode("utf-8"))

    def iter_content(self, chunk_size: int = 1) -> Iterator[bytes]:
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start : start + chunk_size]

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class FakeSession:
    """Record GET requests and answer them from a URL -> response table."""

    def __init__(self, responses: dict[str, FakeResponse | Exception] | None = None) -> None:
        self.responses = dict(responses or {})
        self.headers: dict[str, str] = {}
        self.requests: list[dict[str, Any]] = []

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.requests.append({"url": url, "headers": dict(self.headers), **kwargs})
        response = self.responses.get(url)
        if response is None:
            return FakeResponse(status_code=404)
        if isinstance(response, Exception):
            raise response
        return response


class FakeResolver:
    """Return canned graphs keyed by manifest path, recording calls."""

    def __init__(
        self, packages: list[ResolvedPackage] | Callable[[Path], list[ResolvedPackage]]
    ) -> None:
        self.packages = packages
        self.calls: list[Path] = []

    def resolve(self, manifest_path: Path) -> list[ResolvedPackage]:
        self.calls.append(manifest_path)
        if callable(self.packages):
            return self.packages(manifest_path)
        return list(self.packages)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_base_url="https://registry.test/api/v1")


@pytest.fixture
def lock_payload() -> dict[str, Any]:
    return {
        "scheme-version": "1",
        "plans": {
            "0": {
                "type": "compulsory",
                "conditions": {"employees-count": "> 100", "for-profit": True},
                "payments": {"total": "50USD", "shares": {"alice": 70, "bob": 30}},
            }
        },
        "payees": {
            "alice": {"url": "https://example.org/alice"},
            "bob": {"url": "https://example.org/bob"},
        },
    }


@pytest.fixture
def write_lock(lock_payload: dict[str, Any]) -> Callable[..., Path]:
    def _write(directory: Path, payload: dict[str, Any] | None = None) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "OpenFare.lock"
        path.write_text(json.dumps(payload or lock_payload), encoding="utf-8")
        return path

    return _write


def cargo_toml(name: str, version: str) -> str:
    return f'[package]\nname = "{name}"\nversion = "{version}"\nedition = "2021"\n'


@pytest.fixture
def crate_tarball() -> Callable[..., bytes]:
    """Build a gzip tarball laid out like a crates.io download."""

    def _build(name: str, version: str, files: dict[str, str] | None = None) -> bytes:
        top = f"{name}-{version}"
        members = {"Cargo.toml": cargo_toml(name, version), "src/lib.rs": ""}
        members.update(files or {})
        buffer = io.BytesIO()
        with tarfile.open(fileobj=buffer, mode="w:gz") as tf:
            for rel, text in members.items():
                data = text.encode("utf-8")
                info = tarfile.TarInfo(f"{top}/{rel}")
                info.size = len(data)
                tf.addfile(info, io.BytesIO(data))
        return buffer.getvalue()

    return _build


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    yield
    logging.disable(logging.NOTSET)


@pytest.fixture
def network_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")
