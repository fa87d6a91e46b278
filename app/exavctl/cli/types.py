"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from collections.abc import Mapping
from enum import Enum
from pathlib import Path

import typer

from exavctl.core.applier import ApplyReport, ExclusionApplier
from exavctl.core.settings import Settings, SettingsError, load_settings_or_default
from exavctl.models.exclusion import ExclusionKind
from exavctl.operators.base import ExclusionOperator
from exavctl.operators.defender import DefenderOperator
from exavctl.providers.base import ConfigProvider
from exavctl.providers.exchange import ExchangeShellProvider
from exavctl.utils.formatting import print_error, print_info, print_success, print_warning


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def get_settings(ctx: typer.Context) -> Settings:
    """Load settings for a command, exiting on invalid settings.

    Args:
        ctx: Typer context carrying the global ``--config`` option.

    Returns:
        Loaded or default Settings.
    """
    config_path: Path | None = (ctx.obj or {}).get("config_path")
    try:
        return load_settings_or_default(config_path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def get_provider(settings: Settings) -> ConfigProvider:
    """Create the configuration provider described by the settings."""
    return ExchangeShellProvider(
        executable=settings.powershell,
        snapin=settings.exchange_snapin,
        timeout=float(settings.timeout_seconds),
    )


def get_operator(settings: Settings, dry_run: bool) -> ExclusionOperator:
    """Create the exclusion operator described by the settings."""
    return DefenderOperator(dry_run=dry_run, executable=settings.powershell)


def run_applier(
    operator: ExclusionOperator,
    files: Mapping[ExclusionKind, Path],
) -> ApplyReport:
    """Apply exclusion files and print the outcome.

    Args:
        operator: Operator used for submissions.
        files: Mapping of kind to exclusion file.

    Returns:
        ApplyReport from the applier.

    Raises:
        typer.Exit: If an exclusion file cannot be read.
    """
    try:
        report = ExclusionApplier(operator).apply(files)
    except OSError as e:
        print_error(f"Failed to read exclusion file: {e}")
        raise typer.Exit(code=1) from e

    if not report.available:
        print_warning(f"{operator.name} preference management is not available; skipping.")
        return report

    for result in report.failed:
        print_warning(f"{result.kind.value}: {result.value}: {result.error}")

    prefix = "Dry-run: " if operator.dry_run else ""
    succeeded = len(report.succeeded)
    failed = len(report.failed)
    if failed:
        print_info(f"{prefix}Applied {succeeded} exclusions, {failed} failed.")
    else:
        print_success(f"{prefix}Applied {succeeded} exclusions.")
    return report
