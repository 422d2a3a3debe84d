"""Run ``cargo build`` and pick the executable to debug."""

from __future__ import annotations

import logging
import shlex
import subprocess
import sys
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from cargo_debug.errors import BuildError

from .messages import CargoMessage, CompilerArtifact, CompilerMessage, parse_message

__all__ = [
    "BuildArtifact",
    "BuildOutcome",
    "CargoBuildRequest",
    "build_artifact",
    "build_command",
    "collect_artifacts",
    "run_cargo_build",
    "select_artifact",
]

logger = logging.getLogger(__name__)

# Build scripts are compiled to executables too, but never what the user wants.
_EXCLUDED_KINDS = frozenset({"custom-build"})


@dataclass(frozen=True, slots=True)
class CargoBuildRequest:
    """Selectors forwarded to ``cargo build``."""

    cargo: str = "cargo"
    bin: str | None = None
    example: str | None = None
    package: str | None = None
    manifest_path: Path | None = None
    release: bool = False
    profile: str | None = None
    features: Sequence[str] = ()
    all_features: bool = False
    no_default_features: bool = False
    target: str | None = None
    cwd: Path | None = None


@dataclass(frozen=True, slots=True)
class BuildArtifact:
    """An executable produced by cargo for the current invocation."""

    name: str
    kinds: tuple[str, ...]
    package_id: str
    executable: Path

    @classmethod
    def from_message(cls, message: CompilerArtifact) -> BuildArtifact:
        if message.executable is None:
            raise ValueError("artifact has no executable")
        return cls(
            name=message.target.name,
            kinds=tuple(message.target.kind),
            package_id=message.package_id,
            executable=Path(message.executable),
        )


@dataclass(slots=True)
class BuildOutcome:
    """Everything observed while cargo ran."""

    returncode: int
    artifacts: list[BuildArtifact] = field(default_factory=list)
    success: bool | None = None


def build_command(request: CargoBuildRequest) -> list[str]:
    """Synthesize the ``cargo build`` argv for ``request``."""

    argv = [request.cargo, "build", "--message-format=json"]
    if request.release:
        argv.append("--release")
    if request.profile:
        argv.extend(["--profile", request.profile])
    if request.manifest_path is not None:
        argv.extend(["--manifest-path", str(request.manifest_path)])
    if request.package:
        argv.extend(["--package", request.package])
    if request.bin:
        argv.extend(["--bin", request.bin])
    if request.example:
        argv.extend(["--example", request.example])
    if request.features:
        argv.extend(["--features", ",".join(request.features)])
    if request.all_features:
        argv.append("--all-features")
    if request.no_default_features:
        argv.append("--no-default-features")
    if request.target:
        argv.extend(["--target", request.target])
    return argv


def _relay(message: CargoMessage | None, line: str, diagnostics: TextIO) -> None:
    if message is None:
        if line.strip():
            diagnostics.write(line if line.endswith("\n") else line + "\n")
        return
    if isinstance(message, CompilerMessage) and message.message.rendered:
        diagnostics.write(message.message.rendered)
        diagnostics.flush()


def collect_artifacts(
    lines: Iterable[str],
    *,
    on_message: Callable[[CargoMessage | None, str], None] | None = None,
) -> tuple[list[BuildArtifact], bool | None]:
    """Parse cargo's JSON stream, returning executables and the finish flag."""

    artifacts: list[BuildArtifact] = []
    seen: set[Path] = set()
    success: bool | None = None
    for line in lines:
        message = parse_message(line)
        if on_message is not None:
            on_message(message, line)
        if isinstance(message, CompilerArtifact) and message.executable:
            if any(message.target.is_kind(kind) for kind in _EXCLUDED_KINDS):
                continue
            artifact = BuildArtifact.from_message(message)
            if artifact.executable in seen:
                continue
            seen.add(artifact.executable)
            artifacts.append(artifact)
        elif message is not None and message.reason == "build-finished":
            success = bool(getattr(message, "success", False))
    return artifacts, success


def run_cargo_build(
    request: CargoBuildRequest,
    *,
    diagnostics: TextIO | None = None,
) -> BuildOutcome:
    """Run cargo to completion and collect its executable artifacts.

    Cargo's stderr is inherited so progress and errors reach the terminal
    untouched; rendered compiler diagnostics from the JSON stream are written
    to ``diagnostics`` (stderr by default).
    """

    out = diagnostics if diagnostics is not None else sys.stderr
    argv = build_command(request)
    logger.info("running %s", shlex.join(argv))
    try:
        process = subprocess.Popen(  # noqa: S603
            argv,
            cwd=str(request.cwd) if request.cwd is not None else None,
            stdout=subprocess.PIPE,
            text=True,
            bufsize=1,
        )
    except OSError as exc:
        raise BuildError(f"failed to run '{request.cargo}': {exc}") from exc

    artifacts: list[BuildArtifact] = []
    success: bool | None = None
    if process.stdout is not None:
        with process.stdout:
            artifacts, success = collect_artifacts(
                process.stdout, on_message=lambda message, line: _relay(message, line, out)
            )
    returncode = process.wait()
    logger.debug("cargo exited with %s, %d executable artifacts", returncode, len(artifacts))
    return BuildOutcome(returncode=returncode, artifacts=artifacts, success=success)


def _describe(artifacts: Sequence[BuildArtifact]) -> str:
    return ", ".join(f"{a.name} ({'/'.join(a.kinds)})" for a in artifacts)


def select_artifact(
    artifacts: Sequence[BuildArtifact],
    *,
    bin: str | None = None,
    example: str | None = None,
) -> BuildArtifact:
    """Pick exactly one executable; names are matched exactly."""

    if bin is not None or example is not None:
        name, kind = (bin, "bin") if bin is not None else (example, "example")
        matches = [a for a in artifacts if a.name == name and kind in a.kinds]
        if not matches:
            raise BuildError(f"could not find {kind} artifact '{name}'")
        if len({a.executable for a in matches}) > 1:
            raise BuildError(
                f"{kind} name '{name}' matches more than one artifact: {_describe(matches)}; "
                "use --package to disambiguate"
            )
        return matches[0]

    if not artifacts:
        raise BuildError("no binary artifacts were produced")
    if len(artifacts) > 1:
        raise BuildError(
            "more than one binary artifact produced, please explicitly specify the "
            f"binary with --bin or --example: {_describe(artifacts)}"
        )
    return artifacts[0]


def build_artifact(
    request: CargoBuildRequest,
    *,
    diagnostics: TextIO | None = None,
) -> BuildArtifact:
    """Build the crate and return the selected executable."""

    outcome = run_cargo_build(request, diagnostics=diagnostics)
    if outcome.returncode != 0:
        code = outcome.returncode if outcome.returncode > 0 else None
        raise BuildError(
            f"cargo build failed with exit status {outcome.returncode}", exit_code=code
        )
    artifact = select_artifact(outcome.artifacts, bin=request.bin, example=request.example)
    logger.info("selected %s artifact %s", artifact.name, artifact.executable)
    return artifact
