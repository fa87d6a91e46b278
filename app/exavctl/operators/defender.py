"""Microsoft Defender exclusion operator.

Registers exclusions through the Defender PowerShell module
(Add-MpPreference). Requires an elevated session for actual execution.
"""

import logging
import subprocess

from exavctl.models.exclusion import ExclusionKind, ExclusionResult
from exavctl.operators.base import ExclusionOperator
from exavctl.utils.shell import CommandResult, command_exists, quote_ps, run_powershell

logger = logging.getLogger(__name__)

# Add-MpPreference parameter per exclusion kind
_PARAMETERS: dict[ExclusionKind, str] = {
    ExclusionKind.PATHS: "-ExclusionPath",
    ExclusionKind.PROCESSES: "-ExclusionProcess",
    ExclusionKind.EXTENSIONS: "-ExclusionExtension",
}


class DefenderOperator(ExclusionOperator):
    """Operator for Microsoft Defender Antivirus.

    Each exclusion is submitted with its own Add-MpPreference call so that
    one rejected value cannot hide the outcome of the others.

    Attributes:
        dry_run: If True, submissions are logged but not executed.
    """

    # Timeout for a single Add-MpPreference call
    _DEFENDER_TIMEOUT: float = 60.0

    def __init__(self, dry_run: bool = False, executable: str = "powershell.exe") -> None:
        super().__init__(dry_run=dry_run)
        self._executable = executable
        self._available: bool | None = None

    @property
    def name(self) -> str:
        """Return Defender as the agent name."""
        return "Microsoft Defender"

    def is_available(self) -> bool:
        """Check if PowerShell exists and exposes Add-MpPreference.

        The probe runs once per operator instance.
        """
        if self._available is None:
            self._available = self._probe()
        return self._available

    def add_path(self, path: str) -> ExclusionResult:
        """Add a path exclusion with Add-MpPreference -ExclusionPath."""
        return self._submit(ExclusionKind.PATHS, path)

    def add_process(self, process: str) -> ExclusionResult:
        """Add a process exclusion with Add-MpPreference -ExclusionProcess."""
        return self._submit(ExclusionKind.PROCESSES, process)

    def add_extension(self, extension: str) -> ExclusionResult:
        """Add an extension exclusion with Add-MpPreference -ExclusionExtension."""
        return self._submit(ExclusionKind.EXTENSIONS, extension)

    def _probe(self) -> bool:
        """Look up the Defender cmdlet in a PowerShell session."""
        if not command_exists(self._executable):
            logger.debug("%s not found on PATH", self._executable)
            return False
        try:
            result = run_powershell(
                "Get-Command Add-MpPreference -ErrorAction Stop | Out-Null",
                executable=self._executable,
                timeout=self._DEFENDER_TIMEOUT,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("Defender probe failed: %s", e)
            return False
        return result.success

    def _submit(self, kind: ExclusionKind, value: str) -> ExclusionResult:
        """Run Add-MpPreference for a single value.

        Raises:
            subprocess.TimeoutExpired: If PowerShell does not finish in time.
            OSError: If PowerShell cannot be started.
        """
        script = f"Add-MpPreference {_PARAMETERS[kind]} {quote_ps(value)} -ErrorAction Stop"

        if self.dry_run:
            logger.info("Dry-run: %s", script)
            return ExclusionResult(kind=kind, value=value, success=True, message="Dry-run")

        logger.info("Adding Defender %s exclusion: %s", kind.value, value)
        result = run_powershell(script, executable=self._executable, timeout=self._DEFENDER_TIMEOUT)
        return self._to_result(kind, value, result)

    def _to_result(self, kind: ExclusionKind, value: str, result: CommandResult) -> ExclusionResult:
        """Convert a PowerShell result into an ExclusionResult."""
        if result.success:
            return ExclusionResult(kind=kind, value=value, success=True, message="Exclusion added")
        error_msg = result.stderr.strip() or "Add-MpPreference failed"
        return ExclusionResult(kind=kind, value=value, success=False, error=error_msg)
