"""Error taxonomy for the launcher.

Every failure is terminal for the invocation: the CLI converts the error to a
single ``error: ...`` line and exits with :attr:`LauncherError.exit_code`.
"""

from __future__ import annotations

__all__ = [
    "BuildError",
    "DebuggerNotFound",
    "LauncherError",
    "SpawnError",
]


class LauncherError(RuntimeError):
    """Base class for failures surfaced to the user."""

    exit_code: int = 1

    def __init__(self, message: str, *, exit_code: int | None = None) -> None:
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class BuildError(LauncherError):
    """Raised when cargo fails or the artifact cannot be uniquely identified."""

    # cargo's own exit status for a failed build
    exit_code = 101


class DebuggerNotFound(LauncherError):
    """Raised when the requested debugger cannot be located."""

    exit_code = 127

    def __init__(self, name: str, *, source: str | None = None) -> None:
        self.name = name
        self.source = source
        origin = f" (from {source})" if source else ""
        super().__init__(f"could not find debugger '{name}'{origin} on PATH")


class SpawnError(LauncherError):
    """Raised when the debugger process could not be created."""

    exit_code = 126

    def __init__(self, executable: str, cause: OSError) -> None:
        self.executable = executable
        self.cause = cause
        super().__init__(f"failed to start debugger '{executable}': {cause}")
