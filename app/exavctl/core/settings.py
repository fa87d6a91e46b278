"""exavctl settings and run context resolution.

Settings are stored in ~/.config/exavctl/config.toml. Every field is
optional; unset values fall back to the Windows environment of the
Exchange server (ExchangeInstallPath, SystemRoot, SystemDrive,
COMPUTERNAME).
"""

import os
import socket
import tomllib
from collections.abc import Mapping
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from exavctl.core.paths import get_settings_path
from exavctl.models.context import RunContext
from exavctl.providers.exchange import DEFAULT_SNAPIN


class Settings(BaseModel):
    """User settings for exavctl.

    Attributes:
        install_path: Exchange install root. None = $env:ExchangeInstallPath.
        system_root: Windows directory. None = $env:SystemRoot.
        system_drive: System drive. None = $env:SystemDrive.
        output_dir: Directory for exclusion files. None = current directory.
        powershell: PowerShell executable used for queries and Defender.
        exchange_snapin: Exchange management snap-in loaded before queries.
        timeout_seconds: Timeout for each Exchange query.
    """

    model_config = ConfigDict(extra="forbid")

    install_path: Annotated[
        str | None,
        Field(description="Exchange install root (None = ExchangeInstallPath)"),
    ] = None
    system_root: Annotated[
        str | None,
        Field(description="Windows directory (None = SystemRoot)"),
    ] = None
    system_drive: Annotated[
        str | None,
        Field(description="System drive (None = SystemDrive)"),
    ] = None
    output_dir: Annotated[
        Path | None,
        Field(description="Output directory (None = current directory)"),
    ] = None
    powershell: Annotated[
        str,
        Field(min_length=1, description="PowerShell executable"),
    ] = "powershell.exe"
    exchange_snapin: Annotated[
        str,
        Field(min_length=1, description="Exchange management snap-in"),
    ] = DEFAULT_SNAPIN
    timeout_seconds: Annotated[
        int,
        Field(ge=10, le=3600, description="Per-query timeout in seconds (10-3600)"),
    ] = 120


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsNotFoundError(SettingsError):
    """Raised when the settings file is not found."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings object.

    Raises:
        SettingsNotFoundError: If the settings file doesn't exist.
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the content doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        raise SettingsNotFoundError(f"Settings not found: {settings_path}")

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings content: {e}") from e


def load_settings_or_default(path: Path | None = None) -> Settings:
    """Load settings, using defaults if the default file is absent.

    An explicitly given path must exist.

    Raises:
        SettingsError: If the file exists but is invalid, or if an
            explicit path does not exist.
    """
    if path is None and not get_settings_path().exists():
        return Settings()
    return load_settings(path)


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Destination path. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)

    # TOML has no null; unset fields are simply omitted
    data = settings.model_dump(mode="json", exclude_none=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path


def resolve_hostname(host: str | None = None, environ: Mapping[str, str] | None = None) -> str:
    """Return the target server name.

    Uses the explicit host, then COMPUTERNAME, then the socket hostname.
    """
    env = os.environ if environ is None else environ
    return host or env.get("COMPUTERNAME") or socket.gethostname()


def resolve_context(
    settings: Settings,
    *,
    host: str | None = None,
    install_path: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> RunContext:
    """Resolve the run context from options, settings and environment.

    Precedence for each value: explicit argument, settings file,
    environment variable, built-in default.

    Args:
        settings: Loaded settings.
        host: Server name override.
        install_path: Exchange install root override.
        environ: Environment mapping. If None, uses os.environ.

    Returns:
        RunContext for the build.

    Raises:
        SettingsError: If the Exchange install path cannot be determined.
    """
    env = os.environ if environ is None else environ

    hostname = resolve_hostname(host, env)
    install = install_path or settings.install_path or env.get("ExchangeInstallPath")
    if not install:
        msg = (
            "Exchange install path is unknown. "
            "Set ExchangeInstallPath, install_path in settings, or pass --install-path."
        )
        raise SettingsError(msg)

    return RunContext(
        hostname=hostname,
        install_path=install,
        system_root=settings.system_root or env.get("SystemRoot") or "C:\\Windows",
        system_drive=settings.system_drive or env.get("SystemDrive") or "C:",
    )
