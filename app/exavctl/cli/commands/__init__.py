"""CLI commands for exavctl.

This package contains all subcommand implementations.
"""

from exavctl.cli.commands import apply, build, config

__all__ = ["apply", "build", "config"]
