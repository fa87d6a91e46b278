"""Build command implementation.

Queries the server's Exchange configuration, writes the three
exclusion list files and optionally applies them to Defender.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from exavctl.cli.types import (
    OutputFormat,
    get_operator,
    get_provider,
    get_settings,
    run_applier,
)
from exavctl.core.builder import ExclusionListBuilder
from exavctl.core.settings import SettingsError, resolve_context
from exavctl.core.writer import write_exclusion_lists
from exavctl.models.exclusion import ExclusionKind, ExclusionLists
from exavctl.models.report import ExclusionReport
from exavctl.providers.base import ProviderError
from exavctl.utils.formatting import (
    console,
    create_summary_table,
    err_console,
    print_error,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Build antivirus exclusion lists for an Exchange server.",
    invoke_without_command=True,
)


def _print_summary(
    lists: ExclusionLists,
    files: dict[ExclusionKind, Path],
    hostname: str,
) -> None:
    """Print a table with entry counts and output files."""
    table = create_summary_table(f"Antivirus Exclusions ({hostname})")
    for kind in ExclusionKind:
        table.add_row(
            f"[kind.{kind.value}]{kind.value}[/]",
            str(len(lists.get(kind))),
            str(files[kind]),
        )
    console.print(table)


@app.callback(invoke_without_command=True)
def build_exclusions(
    ctx: typer.Context,
    host: Annotated[
        str | None,
        typer.Option(
            "--host",
            "-H",
            help="Exchange server name (default: this computer).",
        ),
    ] = None,
    install_path: Annotated[
        str | None,
        typer.Option(
            "--install-path",
            "-i",
            help="Exchange install root (default: $env:ExchangeInstallPath).",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory for the exclusion files (default: current directory).",
            file_okay=False,
        ),
    ] = None,
    apply: Annotated[
        bool,
        typer.Option(
            "--apply",
            "-a",
            help="Register the exclusions with Microsoft Defender.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="With --apply, show what would be registered without changing Defender.",
        ),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Build path, process and extension exclusion lists.

    Writes av-exclusions-<host>-paths.txt, -procs.txt and -extensions.txt,
    overwriting files from previous runs.

    Examples:
        exavctl build                        # Build for this server
        exavctl build -o C:\\Reports          # Write files elsewhere
        exavctl build --format json          # Print the lists as JSON
        exavctl build --apply                # Build and register with Defender
        exavctl build --apply --dry-run      # Preview Defender changes
    """
    # Skip if a subcommand is being invoked
    if ctx.invoked_subcommand is not None:
        return

    if dry_run and not apply:
        print_warning("--dry-run has no effect without --apply.")

    settings = get_settings(ctx)

    try:
        context = resolve_context(settings, host=host, install_path=install_path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    provider = get_provider(settings)
    if not provider.is_available():
        print_error(f"{settings.powershell} is not available on this system.")
        raise typer.Exit(code=1)

    try:
        roles = provider.get_server_roles(context.hostname)
        if not roles.is_transport:
            print_warning(
                f"{context.hostname} has neither the Mailbox nor the Edge Transport role; "
                "lists will be empty."
            )
        lists = ExclusionListBuilder(context).build(roles, provider)
    except ProviderError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    directory = (output_dir or settings.output_dir or Path.cwd()).resolve()
    try:
        files = write_exclusion_lists(lists, directory, context.hostname)
    except OSError as e:
        print_error(f"Failed to write exclusion files: {e}")
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        report = ExclusionReport.create(lists, context.hostname, roles)
        console.print_json(json.dumps(report.to_dict()))
    else:
        _print_summary(lists, files, context.hostname)

    if apply:
        run_applier(get_operator(settings, dry_run), files)

    # Keep stdout parseable in JSON mode
    if output_format == OutputFormat.JSON:
        err_console.print("[success]Done[/]")
    else:
        print_success("Done")
