"""Debugger process spawning and exit-status relay."""

from .process import CommandResult, CommandSpec, exit_status, render_command, run_command

__all__ = [
    "CommandResult",
    "CommandSpec",
    "exit_status",
    "render_command",
    "run_command",
]
