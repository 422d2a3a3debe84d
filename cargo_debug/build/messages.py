"""Pydantic models for cargo's ``--message-format=json`` output."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

__all__ = [
    "BuildFinished",
    "BuildScriptExecuted",
    "CargoMessage",
    "CargoTarget",
    "CompilerArtifact",
    "CompilerMessage",
    "parse_message",
]


class CargoMessage(BaseModel):
    """Any line cargo emits on stdout; unknown reasons stay generic."""

    model_config = ConfigDict(extra="allow")

    reason: str


class CargoTarget(BaseModel):
    name: str
    kind: list[str] = Field(default_factory=list)
    crate_types: list[str] = Field(default_factory=list)
    src_path: str | None = None

    def is_kind(self, kind: str) -> bool:
        return kind in self.kind


class CompilerArtifact(CargoMessage):
    """A compiled unit; ``executable`` is set for runnable targets only."""

    package_id: str
    target: CargoTarget
    filenames: list[str] = Field(default_factory=list)
    executable: str | None = None
    fresh: bool = False


class Diagnostic(BaseModel):
    message: str = ""
    level: str = ""
    rendered: str | None = None


class CompilerMessage(CargoMessage):
    package_id: str | None = None
    target: CargoTarget | None = None
    message: Diagnostic


class BuildScriptExecuted(CargoMessage):
    package_id: str
    out_dir: str | None = None


class BuildFinished(CargoMessage):
    success: bool


_MODELS: dict[str, type[CargoMessage]] = {
    "compiler-artifact": CompilerArtifact,
    "compiler-message": CompilerMessage,
    "build-script-executed": BuildScriptExecuted,
    "build-finished": BuildFinished,
}


def parse_message(line: str) -> CargoMessage | None:
    """Parse one stdout line from cargo.

    Returns ``None`` for lines that are not JSON objects with a ``reason``
    (build scripts and wrappers occasionally print plain text to stdout).
    """

    line = line.strip()
    if not line.startswith("{"):
        return None
    try:
        data: Any = json.loads(line)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict) or "reason" not in data:
        return None
    model = _MODELS.get(str(data["reason"]), CargoMessage)
    for candidate in (model, CargoMessage):
        try:
            return candidate.model_validate(data)
        except ValidationError:
            continue
    return None
