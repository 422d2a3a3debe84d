"""Debugger variants, argument conventions and resolution."""

from .base import DebuggerAdapter, DebuggerKind, GenericAdapter, NativeDebuggerLaunchRequest
from .gdb_adapter import GDBAdapter, GDBServerAdapter
from .lldb_adapter import LLDBAdapter
from .registry import (
    ADAPTERS,
    DebuggerChoice,
    adapter_for,
    debugger_kind,
    default_debugger_name,
    resolve_debugger,
)
from .windows_adapter import DevenvAdapter, WinDbgAdapter, find_devenv

__all__ = [
    "ADAPTERS",
    "DebuggerAdapter",
    "DebuggerChoice",
    "DebuggerKind",
    "DevenvAdapter",
    "GDBAdapter",
    "GDBServerAdapter",
    "GenericAdapter",
    "LLDBAdapter",
    "NativeDebuggerLaunchRequest",
    "WinDbgAdapter",
    "adapter_for",
    "debugger_kind",
    "default_debugger_name",
    "find_devenv",
    "resolve_debugger",
]
