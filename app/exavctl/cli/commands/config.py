"""Settings commands.

Shows the effective settings and writes a default settings file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from exavctl.cli.types import get_settings
from exavctl.core.paths import get_settings_path
from exavctl.core.settings import Settings, SettingsError, save_settings
from exavctl.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Show or initialise exavctl settings.",
    no_args_is_help=True,
)


def _settings_path(ctx: typer.Context) -> Path:
    """Return the settings path selected by ``--config`` or the default."""
    config_path: Path | None = (ctx.obj or {}).get("config_path")
    return config_path or get_settings_path()


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective settings.

    Unset values fall back to the server's environment at build time.
    """
    settings = get_settings(ctx)
    path = _settings_path(ctx)

    table = Table(
        title="Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Key", no_wrap=True)
    table.add_column("Value", style="info")

    for key, value in settings.model_dump().items():
        display = "[muted](environment)[/]" if value is None else str(value)
        table.add_row(key, display)

    console.print(table)
    source = str(path) if path.exists() else f"{path} (not present, using defaults)"
    console.print(f"\n[dim]Source: {source}[/]")


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite an existing settings file.",
        ),
    ] = False,
) -> None:
    """Write a settings file with default values."""
    path = _settings_path(ctx)

    if path.exists() and not force:
        print_error(f"Settings file already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_settings(Settings(), path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")
