"""Command-line entry point for ``cargo debug``."""
