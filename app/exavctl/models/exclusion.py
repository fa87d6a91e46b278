"""Exclusion list models.

This module defines the three exclusion list kinds, the immutable
result of a build, and the outcome of submitting a single entry to
the security agent.
"""

from dataclasses import dataclass
from enum import Enum


class ExclusionKind(Enum):
    """Kind of antivirus exclusion.

    The value doubles as the output file suffix and the word used in
    the file header.
    """

    PATHS = "paths"
    PROCESSES = "procs"
    EXTENSIONS = "extensions"


@dataclass(frozen=True, slots=True)
class ExclusionLists:
    """The three ordered exclusion lists produced by a build.

    Attributes:
        paths: File and folder paths.
        processes: Absolute executable paths.
        extensions: File extension tokens.
    """

    paths: tuple[str, ...] = ()
    processes: tuple[str, ...] = ()
    extensions: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Reject empty entries in any list."""
        for kind in ExclusionKind:
            if any(not entry for entry in self.get(kind)):
                msg = f"Exclusion {kind.value} list contains an empty entry"
                raise ValueError(msg)

    def get(self, kind: ExclusionKind) -> tuple[str, ...]:
        """Return the list for the given kind."""
        if kind == ExclusionKind.PATHS:
            return self.paths
        if kind == ExclusionKind.PROCESSES:
            return self.processes
        return self.extensions

    @property
    def counts(self) -> dict[str, int]:
        """Return entry counts keyed by kind value."""
        return {kind.value: len(self.get(kind)) for kind in ExclusionKind}


@dataclass(frozen=True, slots=True)
class ExclusionResult:
    """Result of submitting one exclusion to the security agent.

    Attributes:
        kind: Which exclusion category the entry belongs to.
        value: The submitted path, process or extension.
        success: Whether the submission completed successfully.
        message: Optional success message or additional information.
        error: Optional error message if the submission failed.
    """

    kind: ExclusionKind
    value: str
    success: bool
    message: str | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Check if the submission failed."""
        return not self.success
