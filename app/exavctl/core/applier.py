"""Apply written exclusion lists to a local security agent.

Reads the three exclusion files produced by a build and submits each
entry through an ExclusionOperator, one at a time.
"""

import logging
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from exavctl.core.writer import read_exclusion_file
from exavctl.models.exclusion import ExclusionKind, ExclusionResult
from exavctl.operators.base import ExclusionOperator

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplyReport:
    """Outcome of applying exclusion files.

    Attributes:
        available: False if the security agent could not be managed,
            in which case nothing was submitted.
        results: One result per submitted entry, in submission order.
    """

    available: bool
    results: list[ExclusionResult] = field(default_factory=list)

    @property
    def succeeded(self) -> list[ExclusionResult]:
        """Return results of successful submissions."""
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> list[ExclusionResult]:
        """Return results of failed submissions."""
        return [r for r in self.results if r.failed]


class ExclusionApplier:
    """Submits exclusion file entries to an operator.

    A failure on one entry is logged and recorded; the remaining entries
    are still submitted.
    """

    def __init__(self, operator: ExclusionOperator) -> None:
        self._operator = operator

    def apply(self, files: Mapping[ExclusionKind, Path]) -> ApplyReport:
        """Apply the given exclusion files.

        Args:
            files: Mapping of kind to exclusion file. Kinds are processed
                in ExclusionKind order; missing kinds are skipped.

        Returns:
            ApplyReport describing every submission.

        Raises:
            OSError: If an exclusion file cannot be read.
        """
        if not self._operator.is_available():
            logger.warning(
                "%s preference management is not available; exclusions were not applied",
                self._operator.name,
            )
            return ApplyReport(available=False)

        report = ApplyReport(available=True)
        for kind in ExclusionKind:
            path = files.get(kind)
            if path is None:
                continue
            entries = read_exclusion_file(path)
            logger.debug("Applying %d %s exclusions from %s", len(entries), kind.value, path)
            for entry in entries:
                report.results.append(self._submit(kind, entry))
        return report

    def _submit(self, kind: ExclusionKind, value: str) -> ExclusionResult:
        """Submit one entry, converting errors into a failed result."""
        try:
            result = self._operator.add(kind, value)
        except (OSError, subprocess.TimeoutExpired, RuntimeError) as e:
            result = ExclusionResult(kind=kind, value=value, success=False, error=str(e))

        if result.failed:
            logger.warning("Failed to add %s exclusion %s: %s", kind.value, value, result.error)
        return result
