import json
import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from conftest import FakeResolver
from openfare_crates.errors import DependencyResolutionError, LockParseError
from openfare_crates.models import Package
from openfare_crates.parsers.cargo_metadata import (
    CargoMetadataResolver,
    ResolvedPackage,
    dependencies_locks,
    parse,
)


def _metadata(*packages: tuple[str, str, Path]) -> str:
    return json.dumps(
        {
            "version": 1,
            "packages": [
                {"name": name, "version": version, "manifest_path": str(path)}
                for name, version, path in packages
            ],
            "resolve": None,
        }
    )


def test_parse_extracts_packages(tmp_path: Path) -> None:
    manifest = tmp_path / "serde-1.0.0" / "Cargo.toml"

    resolved = parse(_metadata(("serde", "1.0.0", manifest)))

    assert resolved == [ResolvedPackage("serde", "1.0.0", manifest)]
    assert resolved[0].directory == manifest.parent


@pytest.mark.parametrize(
    "payload", ["not json", "[]", '{"packages": {}}', '{"packages": [{"name": "x"}]}']
)
def test_parse_rejects_unexpected_output(payload: str) -> None:
    with pytest.raises(DependencyResolutionError):
        parse(payload)


def test_resolver_command_line() -> None:
    cmd = CargoMetadataResolver("cargo").command(Path("/p/Cargo.toml"))

    assert cmd == ["cargo", "metadata", "--format-version", "1", "--manifest-path", "/p/Cargo.toml"]
    assert "--no-deps" not in cmd
    assert "--all-features" not in cmd
    assert not any(arg.startswith("--filter-platform") for arg in cmd)


def test_resolver_runs_cargo(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls: list[list[str]] = []
    stdout = _metadata(("foo", "1.0.0", tmp_path / "Cargo.toml"))

    def fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 0, stdout=stdout, stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)

    resolved = CargoMetadataResolver("/opt/cargo").resolve(tmp_path / "Cargo.toml")

    assert [r.name for r in resolved] == ["foo"]
    assert calls[0][0] == "/opt/cargo"


def test_resolver_failure_surfaces_stderr(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    stderr = "error: failed to select a version for the requirement `serde = \"^99\"`"
    monkeypatch.setattr(
        subprocess,
        "run",
        lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 101, stdout="", stderr=stderr),
    )

    with pytest.raises(DependencyResolutionError) as excinfo:
        CargoMetadataResolver().resolve(tmp_path / "Cargo.toml")

    assert stderr in str(excinfo.value)


def test_missing_cargo_binary(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(DependencyResolutionError, match="Failed to run"):
        CargoMetadataResolver("no-such-cargo").resolve(tmp_path / "Cargo.toml")


def test_dependencies_locks_attaches_locks(tmp_path: Path, write_lock: Callable[..., Path]) -> None:
    with_lock = tmp_path / "registry" / "b-1.0.0"
    without_lock = tmp_path / "registry" / "a-2.0.0"
    write_lock(with_lock)
    without_lock.mkdir(parents=True)
    resolver = FakeResolver(
        [
            ResolvedPackage("b", "1.0.0", with_lock / "Cargo.toml"),
            ResolvedPackage("a", "2.0.0", without_lock / "Cargo.toml"),
            ResolvedPackage("b", "1.0.0", with_lock / "Cargo.toml"),
        ]
    )

    locks = dependencies_locks(tmp_path / "Cargo.toml", "crates.io", resolver)

    assert list(locks) == [Package("crates.io", "a", "2.0.0"), Package("crates.io", "b", "1.0.0")]
    assert locks[Package("crates.io", "a", "2.0.0")] is None
    assert locks[Package("crates.io", "b", "1.0.0")] is not None
    assert resolver.calls == [tmp_path / "Cargo.toml"]


def test_dependencies_locks_propagates_bad_lock(tmp_path: Path) -> None:
    broken = tmp_path / "broken-0.1.0"
    broken.mkdir()
    (broken / "OpenFare.lock").write_text("[]", encoding="utf-8")
    resolver = FakeResolver([ResolvedPackage("broken", "0.1.0", broken / "Cargo.toml")])

    with pytest.raises(LockParseError):
        dependencies_locks(tmp_path / "Cargo.toml", "crates.io", resolver)
