"""Argument conventions for lldb."""

from __future__ import annotations

from .base import DebuggerAdapter, DebuggerKind, NativeDebuggerLaunchRequest

__all__ = ["LLDBAdapter"]


class LLDBAdapter(DebuggerAdapter):
    """``lldb --file BINARY [--source FILE] [-- ARGS...]``"""

    kind = DebuggerKind.LLDB

    def build_argv(self, request: NativeDebuggerLaunchRequest) -> list[str]:
        argv = ["--file", request.binary]
        if request.command_file is not None:
            argv.extend(["--source", str(request.command_file)])
        if request.args:
            argv.append("--")
            argv.extend(request.args)
        return argv
