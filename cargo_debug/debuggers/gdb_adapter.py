"""Argument conventions for gdb and gdbserver."""

from __future__ import annotations

from cargo_debug.errors import LauncherError

from .base import DebuggerAdapter, DebuggerKind, NativeDebuggerLaunchRequest

__all__ = ["GDBAdapter", "GDBServerAdapter"]


class GDBAdapter(DebuggerAdapter):
    """``gdb [--command FILE] [--args] BINARY ARGS...``"""

    kind = DebuggerKind.GDB

    def build_argv(self, request: NativeDebuggerLaunchRequest) -> list[str]:
        argv: list[str] = []
        if request.command_file is not None:
            argv.extend(["--command", str(request.command_file)])
        # Without --args gdb would treat the first extra argument as a core file.
        if request.args:
            argv.append("--args")
        argv.append(request.binary)
        argv.extend(request.args)
        return argv


class GDBServerAdapter(DebuggerAdapter):
    """``gdbserver ADDRESS BINARY ARGS...``"""

    kind = DebuggerKind.GDBSERVER

    def build_argv(self, request: NativeDebuggerLaunchRequest) -> list[str]:
        if not request.address:
            raise LauncherError("--address is required when gdbserver is used", exit_code=2)
        return [request.address, request.binary, *request.args]
