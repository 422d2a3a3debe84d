"""Resolve which debugger to run and how to call it."""

from __future__ import annotations

import logging
import os
import platform
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from cargo_debug.config import LauncherConfig
from cargo_debug.errors import DebuggerNotFound

from .base import DebuggerAdapter, DebuggerKind, GenericAdapter
from .gdb_adapter import GDBAdapter, GDBServerAdapter
from .lldb_adapter import LLDBAdapter
from .windows_adapter import DevenvAdapter, WinDbgAdapter, find_devenv

__all__ = [
    "ADAPTERS",
    "DebuggerChoice",
    "adapter_for",
    "debugger_kind",
    "default_debugger_name",
    "resolve_debugger",
]

logger = logging.getLogger(__name__)

ADAPTERS: dict[DebuggerKind, type[DebuggerAdapter]] = {
    DebuggerKind.GDB: GDBAdapter,
    DebuggerKind.GDBSERVER: GDBServerAdapter,
    DebuggerKind.LLDB: LLDBAdapter,
    DebuggerKind.DEVENV: DevenvAdapter,
    DebuggerKind.WINDBG: WinDbgAdapter,
    DebuggerKind.GENERIC: GenericAdapter,
}

_ALIASES = {
    "gdb": DebuggerKind.GDB,
    "gdbserver": DebuggerKind.GDBSERVER,
    "lldb": DebuggerKind.LLDB,
    "devenv": DebuggerKind.DEVENV,
    "windbg": DebuggerKind.WINDBG,
    "windbgx": DebuggerKind.WINDBG,
}

# Names whose executable differs from the name users type.
_EXECUTABLES = {"windbg": "windbgx"}


@dataclass(frozen=True, slots=True)
class DebuggerChoice:
    """A resolved debugger: what was asked for and what will run."""

    name: str
    source: str
    kind: DebuggerKind
    executable: str


def _stem(name: str) -> str:
    base = Path(name).name.lower()
    if base.endswith(".exe"):
        base = base[: -len(".exe")]
    return base


def debugger_kind(name: str) -> DebuggerKind:
    """Classify a debugger name or path; unknown names fall back to GENERIC."""

    stem = _stem(name)
    if stem.startswith("rust-"):
        stem = stem[len("rust-") :]
    return _ALIASES.get(stem, DebuggerKind.GENERIC)


def default_debugger_name(system: str | None = None) -> str:
    """Platform fallback when neither argument, environment nor config names one."""

    system = system or platform.system()
    if system == "Windows":
        return "devenv"
    if system == "Darwin":
        return "lldb"
    return "gdb"


def _lookup(name: str, which: Callable[[str], str | None]) -> str | None:
    if os.sep in name or (os.altsep and os.altsep in name):
        path = Path(name)
        if path.is_file() and os.access(path, os.X_OK):
            return str(path)
        return None
    return which(name)


def resolve_debugger(
    requested: str | None,
    config: LauncherConfig,
    *,
    system: str | None = None,
    which: Callable[[str], str | None] = shutil.which,
    devenv_locator: Callable[[], str | None] = find_devenv,
) -> DebuggerChoice:
    """Pick the debugger: argument > environment/config > platform default."""

    if requested:
        name, source = requested, "argument"
    elif config.debugger:
        name, source = config.debugger, config.debugger_source or "config"
    else:
        name, source = default_debugger_name(system), "platform default"

    kind = debugger_kind(name)
    candidate = config.executable_for(name)
    if candidate == name:
        candidate = _EXECUTABLES.get(_stem(name), name)
    executable = _lookup(candidate, which)
    if executable is None and kind is DebuggerKind.DEVENV and candidate == name:
        executable = devenv_locator()
    if executable is None:
        raise DebuggerNotFound(candidate, source=source)

    choice = DebuggerChoice(name=name, source=source, kind=kind, executable=executable)
    logger.info("using %s debugger %s (%s)", kind.value, executable, source)
    return choice


def adapter_for(choice: DebuggerChoice) -> DebuggerAdapter:
    return ADAPTERS[choice.kind](choice.executable)
