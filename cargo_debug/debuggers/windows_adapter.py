"""Visual Studio and WinDbg launchers."""

from __future__ import annotations

import json
import logging
import os
import shutil
import subprocess
from collections.abc import Callable, Mapping
from pathlib import Path

from .base import DebuggerAdapter, DebuggerKind, NativeDebuggerLaunchRequest

__all__ = ["DevenvAdapter", "WinDbgAdapter", "find_devenv"]

logger = logging.getLogger(__name__)

_PRODUCT_PREFIX = "Microsoft.VisualStudio.Product."


class DevenvAdapter(DebuggerAdapter):
    """``devenv /DebugExe BINARY ARGS...``"""

    kind = DebuggerKind.DEVENV

    def build_argv(self, request: NativeDebuggerLaunchRequest) -> list[str]:
        return ["/DebugExe", request.binary, *request.args]


class WinDbgAdapter(DebuggerAdapter):
    """``windbgx -o BINARY ARGS...``"""

    kind = DebuggerKind.WINDBG

    def build_argv(self, request: NativeDebuggerLaunchRequest) -> list[str]:
        return ["-o", request.binary, *request.args]


def _vswhere_path(environ: Mapping[str, str], which: Callable[[str], str | None]) -> str | None:
    found = which("vswhere")
    if found:
        return found
    program_files = environ.get("ProgramFiles(x86)") or environ.get("ProgramFiles")
    if not program_files:
        return None
    candidate = Path(program_files) / "Microsoft Visual Studio" / "Installer" / "vswhere.exe"
    return str(candidate) if candidate.is_file() else None


def find_devenv(
    *,
    environ: Mapping[str, str] | None = None,
    which: Callable[[str], str | None] = shutil.which,
) -> str | None:
    """Locate ``devenv.exe`` for the latest Visual Studio installation."""

    env = os.environ if environ is None else environ
    vswhere = _vswhere_path(env, which)
    if vswhere is None:
        logger.debug("vswhere not found")
        return None
    try:
        completed = subprocess.run(  # noqa: S603
            [vswhere, "-latest", "-format", "json"],
            check=True,
            capture_output=True,
            text=True,
        )
        installs = json.loads(completed.stdout or "[]")
    except (OSError, subprocess.CalledProcessError, json.JSONDecodeError) as exc:
        logger.warning("vswhere failed: %s", exc)
        return None
    for install in installs if isinstance(installs, list) else []:
        product_id = str(install.get("productId", ""))
        product_path = install.get("productPath")
        if product_id.startswith(_PRODUCT_PREFIX) and product_path:
            return str(product_path)
    return None
