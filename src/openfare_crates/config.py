"""Runtime settings for the crates.io integration.

Defaults target the public crates.io registry and a ``cargo`` binary on PATH.
Each field can be overridden through an ``OPENFARE_CRATES_*`` environment
variable; explicit keyword arguments to :func:`load_settings` win over both.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from . import __version__


DEFAULT_HOST_NAME = "crates.io"
DEFAULT_API_BASE_URL = "https://crates.io/api/v1"
DEFAULT_CARGO = "cargo"
HTTP_USER_AGENT = f"openfare-crates/{__version__} (https://openfare.dev)"

HOST_NAME_ENV_VAR = "OPENFARE_CRATES_HOST_NAME"
API_BASE_URL_ENV_VAR = "OPENFARE_CRATES_REGISTRY_URL"
CARGO_ENV_VAR = "OPENFARE_CRATES_CARGO"
TIMEOUT_ENV_VAR = "OPENFARE_CRATES_TIMEOUT"
LOG_ENV_VAR = "OPENFARE_CRATES_LOG"


class ConfigError(RuntimeError):
    """Raised when settings are missing or invalid."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Registry identity, endpoints and tooling used by a single integration."""

    host_name: str = DEFAULT_HOST_NAME
    api_base_url: str = DEFAULT_API_BASE_URL
    cargo: str = DEFAULT_CARGO
    user_agent: str = HTTP_USER_AGENT
    timeout: float | None = None

    def __post_init__(self) -> None:
        if not self.host_name:
            raise ConfigError("host_name must be a non-empty string")
        if not self.api_base_url.startswith(("http://", "https://")):
            raise ConfigError(f"api_base_url must be an http(s) URL: {self.api_base_url!r}")
        if not self.cargo:
            raise ConfigError("cargo must name an executable")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")


def _parse_timeout(raw: str) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{TIMEOUT_ENV_VAR} must be a number, got {raw!r}") from exc


def load_settings(environ: Mapping[str, str] | None = None, **overrides: Any) -> Settings:
    """Build settings from defaults, environment variables and overrides.

    Args:
        environ: Mapping to read variables from; defaults to ``os.environ``.
        **overrides: Explicit field values taking priority over the environment.

    Raises:
        ConfigError: If any resulting value is invalid.
    """
    env = os.environ if environ is None else environ
    values: dict[str, Any] = {}

    if env.get(HOST_NAME_ENV_VAR):
        values["host_name"] = env[HOST_NAME_ENV_VAR].strip()
    if env.get(API_BASE_URL_ENV_VAR):
        values["api_base_url"] = env[API_BASE_URL_ENV_VAR].strip().rstrip("/")
    if env.get(CARGO_ENV_VAR):
        values["cargo"] = env[CARGO_ENV_VAR].strip()
    if env.get(TIMEOUT_ENV_VAR):
        values["timeout"] = _parse_timeout(env[TIMEOUT_ENV_VAR].strip())

    unknown = set(overrides) - set(Settings.__dataclass_fields__)
    if unknown:
        raise ConfigError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
    values.update(overrides)

    return Settings(**values)
