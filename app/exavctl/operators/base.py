"""Abstract base class for exclusion operators.

This module defines the ExclusionOperator interface that security agent
backends implement to register antivirus exclusions.
"""

from abc import ABC, abstractmethod

from exavctl.models.exclusion import ExclusionKind, ExclusionResult


class ExclusionOperator(ABC):
    """Abstract base class for all exclusion operators.

    Operators submit individual exclusions to a local security agent's
    preference store. Each submission is independent and reports its own
    ExclusionResult.

    Attributes:
        dry_run: If True, only simulate submissions without executing them.

    Example:
        >>> operator = DefenderOperator(dry_run=True)
        >>> if operator.is_available():
        ...     result = operator.add_path("D:\\\\ExchangeDatabases")
        ...     print(result.success)
    """

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the operator.

        Args:
            dry_run: If True, only simulate submissions without executing them.
        """
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if operator is in dry-run mode."""
        return self._dry_run

    @property
    @abstractmethod
    def name(self) -> str:
        """Return a human-readable name of the security agent."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the preference store can be managed on this system.

        Returns:
            True if exclusions can be submitted, False otherwise.
        """

    @abstractmethod
    def add_path(self, path: str) -> ExclusionResult:
        """Register a file or folder path exclusion."""

    @abstractmethod
    def add_process(self, process: str) -> ExclusionResult:
        """Register a process exclusion."""

    @abstractmethod
    def add_extension(self, extension: str) -> ExclusionResult:
        """Register a file extension exclusion."""

    def add(self, kind: ExclusionKind, value: str) -> ExclusionResult:
        """Dispatch a submission to the operation for its kind.

        Args:
            kind: Exclusion category.
            value: Path, process or extension to exclude.

        Returns:
            ExclusionResult of the submission.
        """
        if kind == ExclusionKind.PATHS:
            return self.add_path(value)
        if kind == ExclusionKind.PROCESSES:
            return self.add_process(value)
        return self.add_extension(value)
