"""Shell execution utilities.

Provides subprocess execution for PowerShell-backed queries with
proper error handling.
"""

import shutil
import subprocess
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
) -> CommandResult:
    """Execute a shell command and return the result.

    Args:
        args: Command and arguments to execute.
        timeout: Maximum time in seconds to wait for command.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None


def quote_ps(value: str) -> str:
    """Quote a value as a single-quoted PowerShell string literal.

    Embedded single quotes are doubled, which is the only escape
    PowerShell recognises inside single-quoted strings.
    """
    return "'" + value.replace("'", "''") + "'"


def run_powershell(
    script: str,
    *,
    executable: str = "powershell.exe",
    timeout: float | None = 120.0,
) -> CommandResult:
    """Run a PowerShell script block non-interactively.

    Args:
        script: Script text passed to ``-Command``.
        executable: PowerShell executable name or path.
        timeout: Maximum time in seconds to wait for the script.

    Returns:
        CommandResult of the PowerShell process.

    Raises:
        subprocess.TimeoutExpired: If the script exceeds timeout.
        FileNotFoundError: If the PowerShell executable is not found.
    """
    return run_command(
        [executable, "-NoProfile", "-NonInteractive", "-Command", script],
        timeout=timeout,
    )
