"""Cargo build invocation and artifact selection."""

from .cargo import (
    BuildArtifact,
    BuildOutcome,
    CargoBuildRequest,
    build_artifact,
    build_command,
    collect_artifacts,
    run_cargo_build,
    select_artifact,
)
from .messages import (
    BuildFinished,
    CargoMessage,
    CargoTarget,
    CompilerArtifact,
    CompilerMessage,
    parse_message,
)

__all__ = [
    "BuildArtifact",
    "BuildFinished",
    "BuildOutcome",
    "CargoBuildRequest",
    "CargoMessage",
    "CargoTarget",
    "CompilerArtifact",
    "CompilerMessage",
    "build_artifact",
    "build_command",
    "collect_artifacts",
    "parse_message",
    "run_cargo_build",
    "select_artifact",
]
