"""CLI package for exavctl.

This package contains the Typer application and all subcommands.
"""

from exavctl.cli.main import app

__all__ = ["app"]
