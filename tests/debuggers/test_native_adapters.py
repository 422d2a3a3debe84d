from __future__ import annotations

from pathlib import Path

import pytest

from cargo_debug.debuggers import (
    DevenvAdapter,
    GDBAdapter,
    GDBServerAdapter,
    GenericAdapter,
    LLDBAdapter,
    NativeDebuggerLaunchRequest,
    WinDbgAdapter,
)
from cargo_debug.errors import LauncherError

BINARY = "/work/target/debug/foo"


def test_gdb_without_args_passes_bare_binary() -> None:
    command = GDBAdapter("/usr/bin/gdb").command(NativeDebuggerLaunchRequest(binary=BINARY))

    assert list(command.argv) == ["/usr/bin/gdb", BINARY]


def test_gdb_with_args_uses_dash_dash_args() -> None:
    request = NativeDebuggerLaunchRequest(binary=BINARY, args=["-l", "/usr"])

    assert GDBAdapter("gdb").build_argv(request) == ["--args", BINARY, "-l", "/usr"]


def test_gdb_command_file_comes_first() -> None:
    request = NativeDebuggerLaunchRequest(
        binary=BINARY, args=["x"], command_file=Path("init.gdb")
    )

    assert GDBAdapter("gdb").build_argv(request) == [
        "--command",
        "init.gdb",
        "--args",
        BINARY,
        "x",
    ]


def test_lldb_command_shape() -> None:
    request = NativeDebuggerLaunchRequest(binary=BINARY, args=["-c", "echo hi"])

    assert LLDBAdapter("lldb").build_argv(request) == [
        "--file",
        BINARY,
        "--",
        "-c",
        "echo hi",
    ]


def test_lldb_source_file_without_args() -> None:
    request = NativeDebuggerLaunchRequest(binary=BINARY, command_file=Path("init.lldb"))

    assert LLDBAdapter("lldb").build_argv(request) == [
        "--file",
        BINARY,
        "--source",
        "init.lldb",
    ]


def test_gdbserver_requires_address() -> None:
    adapter = GDBServerAdapter("gdbserver")

    with pytest.raises(LauncherError, match="--address") as excinfo:
        adapter.build_argv(NativeDebuggerLaunchRequest(binary=BINARY))
    assert excinfo.value.exit_code == 2

    request = NativeDebuggerLaunchRequest(binary=BINARY, args=["a"], address="localhost:1234")
    assert adapter.build_argv(request) == ["localhost:1234", BINARY, "a"]


def test_windows_debuggers() -> None:
    request = NativeDebuggerLaunchRequest(binary="C:\\t\\foo.exe", args=["a"])

    assert DevenvAdapter("devenv.exe").build_argv(request) == ["/DebugExe", "C:\\t\\foo.exe", "a"]
    assert WinDbgAdapter("windbgx").build_argv(request) == ["-o", "C:\\t\\foo.exe", "a"]


def test_unknown_debugger_gets_bare_target() -> None:
    request = NativeDebuggerLaunchRequest(binary=BINARY, args=["a", "b"], env={"FOO": "bar"})
    command = GenericAdapter("/opt/rr").command(request)

    assert list(command.argv) == ["/opt/rr", BINARY, "a", "b"]
    assert command.env == {"FOO": "bar"}
