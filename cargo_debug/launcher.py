"""Build, resolve, launch, relay: the whole ``cargo debug`` pipeline."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from cargo_debug.build import BuildArtifact, CargoBuildRequest, build_artifact
from cargo_debug.config import LauncherConfig
from cargo_debug.debuggers import (
    DebuggerChoice,
    NativeDebuggerLaunchRequest,
    adapter_for,
    resolve_debugger,
)
from cargo_debug.runner import CommandResult, CommandSpec, run_command

__all__ = ["DebugRequest", "Launcher", "LaunchPlan"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DebugRequest:
    """A parsed ``cargo debug`` invocation."""

    debugger: str | None = None
    bin: str | None = None
    example: str | None = None
    package: str | None = None
    manifest_path: Path | None = None
    release: bool = False
    profile: str | None = None
    features: tuple[str, ...] = ()
    all_features: bool = False
    no_default_features: bool = False
    target: str | None = None
    command_file: Path | None = None
    address: str | None = None
    args: tuple[str, ...] = field(default_factory=tuple)

    def build_request(self, cargo: str) -> CargoBuildRequest:
        return CargoBuildRequest(
            cargo=cargo,
            bin=self.bin,
            example=self.example,
            package=self.package,
            manifest_path=self.manifest_path,
            release=self.release,
            profile=self.profile,
            features=self.features,
            all_features=self.all_features,
            no_default_features=self.no_default_features,
            target=self.target,
        )


@dataclass(frozen=True, slots=True)
class LaunchPlan:
    """The artifact, the debugger, and the exact command that will run."""

    artifact: BuildArtifact
    debugger: DebuggerChoice
    command: CommandSpec


class Launcher:
    """Runs the four sequential steps of a debug invocation.

    Collaborators are injectable so tests can swap cargo, the PATH lookup or
    the process spawn for fakes.
    """

    def __init__(
        self,
        config: LauncherConfig,
        *,
        build: Callable[..., BuildArtifact] = build_artifact,
        resolve: Callable[..., DebuggerChoice] = resolve_debugger,
        spawn: Callable[[CommandSpec], CommandResult] = run_command,
        diagnostics: TextIO | None = None,
    ) -> None:
        self.config = config
        self._build = build
        self._resolve = resolve
        self._spawn = spawn
        self._diagnostics = diagnostics

    def plan(self, request: DebugRequest) -> LaunchPlan:
        """Build the artifact and synthesize the debugger command."""

        artifact = self._build(
            request.build_request(self.config.cargo), diagnostics=self._diagnostics
        )
        choice = self._resolve(request.debugger, self.config)
        adapter = adapter_for(choice)
        command = adapter.command(
            NativeDebuggerLaunchRequest(
                binary=str(artifact.executable),
                args=tuple(request.args),
                command_file=request.command_file,
                address=request.address,
            )
        )
        logger.debug("synthesized debugger argv: %s", list(command.argv))
        return LaunchPlan(artifact=artifact, debugger=choice, command=command)

    def launch(self, plan: LaunchPlan) -> int:
        """Spawn the planned debugger and return its exit status."""

        return self._spawn(plan.command).exit_code

    def run(self, request: DebugRequest) -> int:
        return self.launch(self.plan(request))
