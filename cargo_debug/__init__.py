"""Build a cargo target and launch a debugger on the resulting executable."""

from .version import __version__  # noqa: F401
