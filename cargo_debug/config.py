"""Configuration helpers for the launcher."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from cargo_debug.errors import LauncherError

_CONFIG_FILENAME = "config.toml"
_ENV_HOME = "CARGO_DEBUG_HOME"
_ENV_DEBUGGER = "CARGO_DEBUGGER"
_ENV_CARGO = "CARGO"

__all__ = [
    "LauncherConfig",
    "config_path",
    "load_launcher_config",
]


@dataclass(slots=True)
class LauncherConfig:
    """Represents persisted launcher settings plus environment overrides."""

    debugger: str | None = None
    debugger_source: str | None = None
    cargo: str = "cargo"
    debugger_paths: dict[str, str] = field(default_factory=dict)

    def merged(
        self,
        *,
        debugger: str | None = None,
        debugger_source: str | None = None,
        cargo: str | None = None,
    ) -> LauncherConfig:
        """Return a copy that applies environment/CLI overrides."""

        if debugger:
            source = debugger_source
        else:
            source = self.debugger_source
        return replace(
            self,
            debugger=debugger or self.debugger,
            debugger_source=source,
            cargo=cargo or self.cargo,
            debugger_paths=dict(self.debugger_paths),
        )

    def executable_for(self, name: str) -> str:
        """Return the configured executable for ``name`` (or ``name`` itself)."""

        return self.debugger_paths.get(name, name)


def _config_dir() -> Path:
    custom = os.environ.get(_ENV_HOME)
    return Path(custom) if custom else Path.home() / ".cargo-debug"


def config_path() -> Path:
    """Return the path to the launcher configuration file."""

    return _config_dir() / _CONFIG_FILENAME


def _read_file(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise LauncherError(f"invalid configuration in {path}: {exc}", exit_code=2) from exc


def _debugger_paths(data: Mapping[str, Any]) -> dict[str, str]:
    section = data.get("debuggers", {})
    if not isinstance(section, Mapping):
        raise LauncherError("invalid configuration: [debuggers] must be a table", exit_code=2)
    paths: dict[str, str] = {}
    for name, entry in section.items():
        if isinstance(entry, Mapping) and entry.get("path"):
            paths[str(name)] = str(entry["path"])
    return paths


def load_launcher_config(environ: Mapping[str, str] | None = None) -> LauncherConfig:
    """Load configuration from disk + environment overrides."""

    env = os.environ if environ is None else environ
    data: dict[str, Any] = {}
    path = config_path()
    if path.exists():
        data = _read_file(path)

    file_debugger = data.get("debugger")
    config = LauncherConfig(
        debugger=str(file_debugger) if file_debugger else None,
        debugger_source="config" if file_debugger else None,
        cargo=str(data.get("cargo") or "cargo"),
        debugger_paths=_debugger_paths(data),
    )

    # CARGO is exported by cargo itself when it runs a subcommand; an explicit
    # config entry wins over it.
    env_cargo = None if data.get("cargo") else env.get(_ENV_CARGO)
    return config.merged(
        debugger=env.get(_ENV_DEBUGGER) or None,
        debugger_source="environment",
        cargo=env_cargo,
    )
