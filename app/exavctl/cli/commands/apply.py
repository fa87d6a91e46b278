"""Apply command implementation.

Registers exclusion lists written by a previous build with
Microsoft Defender.
"""

from pathlib import Path
from typing import Annotated

import typer

from exavctl.cli.types import get_operator, get_settings, run_applier
from exavctl.core.settings import resolve_hostname
from exavctl.core.writer import exclusion_file_path
from exavctl.models.exclusion import ExclusionKind
from exavctl.utils.formatting import print_error, print_success

app = typer.Typer(
    help="Apply previously built exclusion lists to Microsoft Defender.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def apply_exclusions(
    ctx: typer.Context,
    host: Annotated[
        str | None,
        typer.Option(
            "--host",
            "-H",
            help="Server name used in the file names (default: this computer).",
        ),
    ] = None,
    input_dir: Annotated[
        Path | None,
        typer.Option(
            "--input-dir",
            "-d",
            help="Directory holding the exclusion files (default: output_dir or cwd).",
            file_okay=False,
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be registered without changing Defender.",
        ),
    ] = False,
) -> None:
    """Register exclusions from av-exclusions-<host>-*.txt files.

    The first two lines of each file (header and blank separator) are
    skipped; every remaining line is submitted individually. A rejected
    entry is reported and does not stop the others.

    Examples:
        exavctl apply                        # Apply files in the current directory
        exavctl apply -d C:\\Reports -H EX01  # Apply files built for EX01
        exavctl apply --dry-run              # Preview only
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = get_settings(ctx)
    hostname = resolve_hostname(host)
    directory = (input_dir or settings.output_dir or Path.cwd()).resolve()

    files = {kind: exclusion_file_path(directory, hostname, kind) for kind in ExclusionKind}
    missing = [path for path in files.values() if not path.is_file()]
    if missing:
        for path in missing:
            print_error(f"Exclusion file not found: {path}")
        raise typer.Exit(code=1)

    run_applier(get_operator(settings, dry_run), files)
    print_success("Done")
