"""Shared debugger launch types and the bare-argument fallback adapter."""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from cargo_debug.runner import CommandSpec

__all__ = [
    "DebuggerAdapter",
    "DebuggerKind",
    "GenericAdapter",
    "NativeDebuggerLaunchRequest",
]


class DebuggerKind(str, enum.Enum):
    """Debuggers with a known argument convention."""

    GDB = "gdb"
    GDBSERVER = "gdbserver"
    LLDB = "lldb"
    DEVENV = "devenv"
    WINDBG = "windbg"
    GENERIC = "generic"


@dataclass(frozen=True, slots=True)
class NativeDebuggerLaunchRequest:
    """Launch configuration for native debuggers."""

    binary: str
    args: Sequence[str] = ()
    command_file: Path | None = None
    address: str | None = None
    cwd: Path | None = None
    env: Mapping[str, str] | None = None


class DebuggerAdapter:
    """Turn a launch request into the argv a particular debugger expects."""

    kind: ClassVar[DebuggerKind] = DebuggerKind.GENERIC

    def __init__(self, executable: str) -> None:
        self.executable = executable

    def build_argv(self, request: NativeDebuggerLaunchRequest) -> list[str]:
        raise NotImplementedError

    def command(self, request: NativeDebuggerLaunchRequest) -> CommandSpec:
        argv = [self.executable, *self.build_argv(request)]
        return CommandSpec(argv=argv, env=request.env, cwd=request.cwd)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.executable!r})"


class GenericAdapter(DebuggerAdapter):
    """Unknown debuggers get the target as a bare argument."""

    kind = DebuggerKind.GENERIC

    def build_argv(self, request: NativeDebuggerLaunchRequest) -> list[str]:
        return [request.binary, *request.args]
