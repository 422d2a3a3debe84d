"""Spawn the debugger in the foreground and relay its exit status."""

from __future__ import annotations

import logging
import os
import shlex
import signal
import subprocess
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from cargo_debug.errors import SpawnError

__all__ = [
    "CommandResult",
    "CommandSpec",
    "exit_status",
    "render_command",
    "run_command",
]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommandSpec:
    """Configuration for the debugger invocation."""

    argv: Sequence[str]
    env: Mapping[str, str] | None = None
    cwd: Path | None = None


@dataclass(slots=True)
class CommandResult:
    """Details about the finished debugger process."""

    returncode: int
    exit_code: int

    @property
    def signal(self) -> int | None:
        return -self.returncode if self.returncode < 0 else None


def exit_status(returncode: int) -> int:
    """Map a ``Popen.returncode`` onto a shell-style exit status."""

    if returncode < 0:
        return 128 - returncode
    return returncode


def render_command(spec: CommandSpec) -> str:
    return shlex.join(list(spec.argv))


def _swallow_sigint(signum: int, frame: object) -> None:
    logger.debug("SIGINT forwarded to debugger")


@contextmanager
def _foreground_child() -> Iterator[None]:
    """Swallow SIGINT in the launcher while the debugger owns the terminal.

    Ctrl+C is delivered to the whole foreground process group; the debugger
    uses it to interrupt the inferior, so the launcher must survive it. A
    caught handler resets to the default on exec, so the child still sees
    SIGINT (SIG_IGN would be inherited).
    """

    try:
        previous = signal.signal(signal.SIGINT, _swallow_sigint)
    except ValueError:  # pragma: no cover - not on the main thread
        yield
        return
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def run_command(spec: CommandSpec) -> CommandResult:
    """Run ``spec`` with inherited stdio and block until it exits."""

    argv = list(spec.argv)
    env = None
    if spec.env:
        env = dict(os.environ)
        env.update({k: str(v) for k, v in spec.env.items()})
    logger.info("launching %s", render_command(spec))
    with _foreground_child():
        try:
            process = subprocess.Popen(  # noqa: S603
                argv,
                cwd=str(spec.cwd) if spec.cwd is not None else None,
                env=env,
            )
        except OSError as exc:
            raise SpawnError(argv[0], exc) from exc
        returncode = process.wait()
    result = CommandResult(returncode=returncode, exit_code=exit_status(returncode))
    if result.signal is not None:
        logger.info("debugger terminated by signal %d", result.signal)
    else:
        logger.info("debugger exited with status %d", result.exit_code)
    return result
